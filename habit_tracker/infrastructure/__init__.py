"""Infrastructure Layer — store implementation and cross-cutting concerns.

Invariants:
    - Implements the contracts in core/repository_protocols.py
    - Imports core/ types only; never services/ or api/

Design Decisions:
    - Storage and logging setup kept out of core/ so the core stays pure
"""
