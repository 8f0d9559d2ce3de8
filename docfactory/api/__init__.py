"""API Layer: FastAPI routes, request-metadata dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes decode, delegate to TemplateService, and encode; no business rules here
"""
