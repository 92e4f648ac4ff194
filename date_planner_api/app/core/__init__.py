"""Configuration and logging helpers shared by the whole application."""
