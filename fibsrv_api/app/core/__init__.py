"""Configuration, logging, errors, operation context and database helpers."""
