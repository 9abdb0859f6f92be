"""Schemas — Pydantic models at the API boundary and in the collection store.

Invariants:
    - Payload models never carry id or timestamps
    - Stored records inherit StoredRecord
"""
