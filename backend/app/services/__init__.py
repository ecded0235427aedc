"""Services Layer — AsyncSession-backed implementations of core boundary protocols.

Invariants:
    - Services load and persist; they never decide (decisions live in core/)
    - Services flush but never commit: routes own the transaction

Design Decisions:
    - One small class or function module per concern
"""
