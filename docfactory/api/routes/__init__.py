"""Route Modules: one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - template_bulk must be registered before templates so /templates/bulk/* wins
"""
