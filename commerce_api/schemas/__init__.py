"""Pydantic Schemas - request/response contracts for API endpoints.

Invariants:
    - Request models forbid unknown properties (extra="forbid")
    - Feature-gated fields are declared with core.validation.feature_flagged
    - Response models read ORM objects (from_attributes) and never expose secrets

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
