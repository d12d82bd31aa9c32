"""Core infrastructure: configuration, logging, errors, transport, auth."""
