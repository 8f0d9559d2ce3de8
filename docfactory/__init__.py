"""DocFactory Template Engine: versioned document templates for many tenants.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
