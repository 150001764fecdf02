"""Repositories — SQLAlchemy implementations of core/repository_protocols.py.

Invariants:
    - Every repository is bound to one AsyncSession passed in by the caller
    - Repositories flush but never commit; the owning service decides the transaction boundary
    - No business rules here beyond the SQL form of the availability predicate

Design Decisions:
    - One repository per entity, mirroring the ORM layout
"""
