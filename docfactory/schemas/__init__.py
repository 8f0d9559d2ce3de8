"""Pydantic Schemas: request/response contracts for the HTTP transport.

Invariants:
    - Schemas decode and trim at the boundary; business rules stay in core/validation
    - Domain types from core/ used for enum fields in responses
"""
