"""Output writing for generated rules."""
from .writer import RuleFileWriter

__all__ = ["RuleFileWriter"]
