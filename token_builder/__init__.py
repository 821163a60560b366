"""
Token builder configuration core.

Holds the token standard registry, the building block catalog, the token
form model with its merge rules, and the per-session configuration store
consumed by the per-standard editors.
"""

__version__ = "0.1.0"
