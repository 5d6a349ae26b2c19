"""Database Infrastructure — SQLAlchemy Base shared by ORM models.

Invariants:
    - Single async engine per process (initialized via init_db)
"""
