"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure; time-dependent ones take an explicit as_of reference date

Design Decisions:
    - Functional core separated from imperative shell: routes and services fetch data and
      configuration, core/ decides
"""
