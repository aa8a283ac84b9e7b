"""Core: configuration, constants and service wiring."""
