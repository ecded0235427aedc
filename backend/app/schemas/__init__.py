"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Request bodies accept the frontend's camelCase keys via aliases
    - Domain types and normalizers from core/ used for enum-like fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
