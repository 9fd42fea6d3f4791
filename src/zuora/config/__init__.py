"""Configuration: settings snapshot, file discovery, and logging setup."""
