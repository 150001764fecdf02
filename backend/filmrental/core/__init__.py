"""Core Layer — pure rental and billing rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, repositories/, infrastructure/, or db/
    - Every time-dependent rule receives `now` as an argument

Design Decisions:
    - Functional core separated from imperative shell: services fetch records,
      call these rules, then persist the outcome
"""
