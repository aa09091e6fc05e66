"""Core application infrastructure: config, logging, database, errors, DI."""
