"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain storage logic (delegate to the injected Collection)

Design Decisions:
    - Explicit registration in create_app() over auto-discovery
"""
