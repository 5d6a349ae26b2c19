"""Infrastructure Layer — persistence and cross-cutting concerns.

Invariants:
    - Infrastructure imports only errors and constants from core/
    - All SQLAlchemy failures mapped to DatabaseError

Design Decisions:
    - Snapshot persistence isolated here so the core stays IO-free
"""
