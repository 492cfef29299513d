"""Core Layer — pure domain logic: entity, validation, derived queries, contracts.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - No logging, no IO; failures are raised as HabitTrackerError subclasses

Design Decisions:
    - Functional core separated from imperative shell
"""
