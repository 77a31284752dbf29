"""Test helpers for rules-kit."""
