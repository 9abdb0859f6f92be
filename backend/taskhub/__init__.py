"""Taskhub — in-memory users/tasks resource server with a token-gated task API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
