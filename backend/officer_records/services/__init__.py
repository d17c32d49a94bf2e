"""Services Layer — imperative shell around core/: config store, personnel writes, history log.

Invariants:
    - Services own commits; routes never call commit for personnel or config writes
    - Retirement config is loaded per operation and passed into core/ explicitly
"""
