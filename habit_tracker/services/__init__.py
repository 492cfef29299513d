"""Services Layer — business logic composed over a habit repository.

Invariants:
    - Every mutation validates before touching the store
    - Not-found classification happens here, never in the store

Design Decisions:
    - Composition over a repository protocol, no CRUD base class
"""
