"""Commerce API Package - admin and storefront HTTP API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
