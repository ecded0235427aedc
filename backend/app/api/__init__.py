"""API Layer — FastAPI routes, request dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (exports excepted)

Design Decisions:
    - Thin routes: load rows, ask core/ for the decision, persist through services/
"""
