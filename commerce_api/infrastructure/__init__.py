"""Infrastructure Layer - database sessions and logging setup.

Invariants:
    - SQLAlchemy errors mapped to core/errors.py types at this boundary
"""
