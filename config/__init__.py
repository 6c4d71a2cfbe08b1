"""Chain symbols, RPC providers and build settings."""
