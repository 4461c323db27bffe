"""Core Layer - pure domain logic: errors, types, flags, validation, password hashing.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO: environment and flags are passed in by the shell
"""
