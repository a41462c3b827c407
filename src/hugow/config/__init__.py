"""Config file management commands."""
