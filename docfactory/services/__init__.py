"""Services Layer: business-rule orchestration over the repository.

Invariants:
    - Services never lock directly; compound work runs inside repository.transaction()
"""
