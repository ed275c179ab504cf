"""Infrastructure layer — SQLite key-value store and id counters.

This layer depends on stdlib and third-party libs (SQLAlchemy, structlog,
pydantic). It must never import from services, commands, or output.
"""
