"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Every operation checks all preconditions before its first mutation

Design Decisions:
    - Functional core separated from imperative shell: collaborators
      (directory, community registry) reach the core through Protocols
"""
