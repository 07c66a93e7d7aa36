"""Persistence layer: database engine, models and repositories."""
