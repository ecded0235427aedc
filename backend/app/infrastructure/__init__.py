"""Infrastructure Layer — database session management and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic (errors.py excepted)
    - Driver exceptions leave this layer as ConflictError (integrity) or DatabaseError
"""
