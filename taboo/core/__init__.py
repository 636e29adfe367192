"""Core services: configuration, logging, errors and retry."""
