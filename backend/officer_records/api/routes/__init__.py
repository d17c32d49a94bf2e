"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Business rules live in core/, write paths in services/; routes only query and compose
"""
