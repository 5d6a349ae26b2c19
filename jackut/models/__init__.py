"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata knows every table
      before create_all runs
"""

from jackut.models.system_snapshot import SystemSnapshot  # noqa: F401
