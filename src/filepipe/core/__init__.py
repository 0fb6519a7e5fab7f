"""Path helpers and configuration."""
