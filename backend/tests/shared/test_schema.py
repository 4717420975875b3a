"""Tests for shared/schema.py."""

import asyncio

import pytest

from shared.schema import SchemaManager, SchemaTask


def counting_step(calls: list, name: str, fail: bool = False, delay: float = 0):
    async def run():
        if delay:
            await asyncio.sleep(delay)
        calls.append(name)
        if fail:
            raise RuntimeError(f"{name} failed")
    return run


class TestSchemaManager:

    @pytest.mark.asyncio
    async def test_runs_steps_in_order_once(self):
        calls = []
        manager = SchemaManager([
            SchemaTask("users", counting_step(calls, "users")),
            SchemaTask("features", counting_step(calls, "features")),
        ])

        await manager.initialize()
        await manager.initialize()

        assert calls == ["users", "features"]
        assert manager.ready is True

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_run(self):
        calls = []
        manager = SchemaManager([SchemaTask("users", counting_step(calls, "users", delay=0.01))])

        await asyncio.gather(*(manager.initialize() for _ in range(5)))

        assert calls == ["users"]

    @pytest.mark.asyncio
    async def test_optional_failure_degrades(self):
        calls = []
        manager = SchemaManager([
            SchemaTask("users", counting_step(calls, "users")),
            SchemaTask("tracking", counting_step(calls, "tracking", fail=True), optional=True),
        ])

        await manager.initialize()

        assert manager.ready is True
        assert manager.degraded == ["tracking"]

    @pytest.mark.asyncio
    async def test_required_failure_allows_retry(self):
        attempts = {"n": 0}

        async def flaky():
            attempts["n"] += 1
            if attempts["n"] == 1:
                raise RuntimeError("connection reset")

        manager = SchemaManager([SchemaTask("users", flaky)])

        with pytest.raises(RuntimeError):
            await manager.initialize()
        assert manager.ready is False

        await manager.initialize()
        assert manager.ready is True
        assert attempts["n"] == 2
