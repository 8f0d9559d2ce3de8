"""Core Layer: pure domain logic, no IO, no locking, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - Functions are pure and deterministic given their inputs (ids and clocks are injected)
"""
