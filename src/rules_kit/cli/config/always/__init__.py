"""Manage the global always-apply rule list."""
