"""Infrastructure Layer: storage backends, locking and cross-cutting concerns.

Invariants:
    - Infrastructure implements core Protocols; core never imports infrastructure
"""
