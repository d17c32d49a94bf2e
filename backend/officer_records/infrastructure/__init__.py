"""Infrastructure Layer — database sessions and cross-cutting concerns (logging).

Invariants:
    - Infrastructure never imports from core/ domain logic except the error hierarchy
"""
