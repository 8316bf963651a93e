"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, client/ or db/
    - All functions are pure and deterministic (given an explicit `now`)

Design Decisions:
    - Functional core separated from imperative shell
"""
