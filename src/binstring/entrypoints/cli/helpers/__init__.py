"""Small helpers shared by CLI commands."""
