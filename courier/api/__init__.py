"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (or 204 for writes)

Design Decisions:
    - Thin routes delegate to services
"""
