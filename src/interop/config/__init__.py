"""Configuration: settings discovery, TOML loading, and logging setup."""
