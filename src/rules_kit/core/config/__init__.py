"""Kit configuration: document models, built-in defaults, store and engine settings."""
from .models import (
    GLOBAL_KEY,
    MCP_TOOLS_KEY,
    ArchitectureConfig,
    McpToolConfig,
    RuleConfig,
    StackConfig,
    VersionRange,
)
from .settings import EngineSettings, resolve_templates_dir
from .store import CONFIG_FILENAMES, ConfigLoadResult, RuleConfigStore, default_config

__all__ = [
    "GLOBAL_KEY",
    "MCP_TOOLS_KEY",
    "ArchitectureConfig",
    "McpToolConfig",
    "RuleConfig",
    "StackConfig",
    "VersionRange",
    "EngineSettings",
    "resolve_templates_dir",
    "CONFIG_FILENAMES",
    "ConfigLoadResult",
    "RuleConfigStore",
    "default_config",
]
