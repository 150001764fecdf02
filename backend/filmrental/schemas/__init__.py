"""Schemas — pydantic models for the HTTP boundary.

Invariants:
    - Request models validate shape and ranges before a service is called
    - Response models read straight from ORM rows (from_attributes)
"""
