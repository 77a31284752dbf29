"""
Agent Rules Kit - layered rule scaffolding for AI coding assistants

Composes Cursor rule documents (``.mdc``) for a project's stack from a
layered template library: base, architecture, version and feature tiers,
routed by a YAML kit configuration.
"""

__version__ = "2.4.2"
__all__ = ["__version__"]
