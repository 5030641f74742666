"""Core application services: configuration, logging and database access."""
