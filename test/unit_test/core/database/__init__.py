"""Unit tests for the database layer.

This package contains unit tests for seerr/core/database, including:

- Entity model and helper tests (SQLModel)
- Repository tests against in-memory SQLite
- Query builder and mocked-session tests for the base repository
"""
