"""Core Layer — domain types, errors and boundary protocols. No IO, no FastAPI.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
"""
