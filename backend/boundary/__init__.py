"""
Boundary layer for external system integrations.

Handles all interactions with the image store (PostgreSQL via SQLAlchemy).
Provides models, CRUD helpers and the search repository.
"""
