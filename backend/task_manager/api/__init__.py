"""API Layer — FastAPI routes, response envelope and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint answers with the {status, statusCode, message, data} envelope

Design Decisions:
    - Thin routes delegate to services/task_service.py
"""
