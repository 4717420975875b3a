"""Request dependencies shared by module routes."""
