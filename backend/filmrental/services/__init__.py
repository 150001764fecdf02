"""Services Layer — async orchestration around the pure core rules.

Invariants:
    - Every service receives its AsyncSession and Clock by constructor parameter
    - Services own the transaction boundary: repositories flush, services commit
    - Business decisions live in core/; services fetch, decide via core, persist

Design Decisions:
    - One service per component (resolver, lifecycle, billing, customer, staff)
"""
