"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.create_app() (no auto-discovery)
    - All endpoints return structured JSON responses
"""
