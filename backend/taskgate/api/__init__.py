"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return {"error": ...} JSON on failure

Design Decisions:
    - Thin routes delegate to the request gate (ADR: ExMA impureim sandwich)
"""
