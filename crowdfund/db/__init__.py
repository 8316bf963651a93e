"""Database Infrastructure — SQLAlchemy Base shared by every ORM model.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
