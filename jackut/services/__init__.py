"""Services Layer — in-memory collaborators and request dispatch.

Invariants:
    - Directory, registries and dispatch are the only callers of the core
    - Every dispatch operation runs inside one coarse lock

Design Decisions:
    - One file per collaborator for locality (no god objects)
"""
