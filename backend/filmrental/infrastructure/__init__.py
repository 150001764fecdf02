"""Infrastructure Layer — database sessions, logging setup, wall clock.

Invariants:
    - Only the shell (services, api, main) imports from here; core never does
"""
