"""Internal helpers: credential discovery and TLS/session setup."""
