"""Shared utilities for Agent Rules Kit."""
