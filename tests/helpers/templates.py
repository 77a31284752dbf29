"""Builders for on-disk template libraries used by tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from rules_kit.core.composition.types import RunContext


class TemplateLibrary:
    """Writes a template library tree (``global/``, ``stacks/``, ``mcp-tools/``)."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, rel: str, content: str) -> Path:
        path = self.root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def write_config(self, data: Dict[str, Any], name: str = "kit-config.yaml") -> Path:
        return self.write(name, yaml.safe_dump(data, sort_keys=False))

    def global_rule(self, name: str, content: str) -> Path:
        return self.write(f"global/{name}", content)

    def base(self, stack: str, name: str, content: str) -> Path:
        return self.write(f"stacks/{stack}/base/{name}", content)

    def version(self, stack: str, version_range: str, name: str, content: str) -> Path:
        return self.write(f"stacks/{stack}/{version_range}/{name}", content)

    def architecture(self, stack: str, arch: str, name: str, content: str) -> Path:
        return self.write(f"stacks/{stack}/architectures/{arch}/{name}", content)

    def state_management(self, stack: str, manager: str, name: str, content: str) -> Path:
        return self.write(f"stacks/{stack}/state-management/{manager}/{name}", content)

    def testing(self, stack: str, name: str, content: str) -> Path:
        return self.write(f"stacks/{stack}/testing/{name}", content)

    def signals(self, stack: str, name: str, content: str, version_range: Optional[str] = None) -> Path:
        if version_range:
            return self.write(f"stacks/{stack}/{version_range}/signals/{name}", content)
        return self.write(f"stacks/{stack}/signals/{name}", content)

    def mcp_tool(self, tool: str, name: str, content: str) -> Path:
        return self.write(f"mcp-tools/{tool}/{name}", content)


def make_run(workspace: Path, stack: str = "laravel", **overrides: Any) -> RunContext:
    return RunContext(stack=stack, workspace=workspace, **overrides)


def rules_dir(workspace: Path) -> Path:
    return workspace / ".cursor" / "rules" / "rules-kit"
