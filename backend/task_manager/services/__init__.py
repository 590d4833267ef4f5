"""Services Layer — entity handlers composing validation, persistence and logging.

Invariants:
    - Services raise core.errors exceptions; they never build HTTP responses
"""
