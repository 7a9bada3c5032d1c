"""Core Layer — pure domain logic and repository contracts, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (ids and clocks are injected or generated)

Design Decisions:
    - Functional core separated from imperative shell
"""
