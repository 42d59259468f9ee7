"""Configuration layer: settings models, TOML discovery, logging setup."""
