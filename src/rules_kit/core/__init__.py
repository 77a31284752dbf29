"""Core library for Agent Rules Kit (configuration, composition, output)."""
