from __future__ import annotations

from pathlib import Path

import pytest

from rules_kit.core.composition.paths import (
    apply_root,
    format_rules_path,
    glob_prefix,
    normalize_project_path,
    rules_root,
)
from rules_kit.core.composition.templating import substitute, substitute_for_run
from rules_kit.core.composition.types import RunContext


@pytest.mark.parametrize(
    "project_path,expected",
    [
        (None, "./"),
        ("", "./"),
        (".", "./"),
        ("./", "./"),
        ("api", "api/"),
        ("api/", "api/"),
        ("apps/web//", "apps/web/"),
    ],
)
def test_glob_prefix_normalization(project_path, expected) -> None:
    assert glob_prefix(project_path) == expected


def test_root_substitution_for_current_directory() -> None:
    pattern = "<root>/app/Http/Controllers/**/*.php"
    assert apply_root(pattern, ".") == "./app/Http/Controllers/**/*.php"


def test_root_substitution_for_subdirectory() -> None:
    pattern = "<root>/app/Http/Controllers/**/*.php"
    assert apply_root(pattern, "api") == "api/app/Http/Controllers/**/*.php"


def test_root_substitution_replaces_every_occurrence() -> None:
    assert apply_root("<root>/a/**,<root>/b/**", "web") == "web/a/**,web/b/**"


def test_normalize_project_path() -> None:
    assert normalize_project_path(None) == "./"
    assert normalize_project_path(".") == "./"
    assert normalize_project_path("api") == "api"


def test_format_rules_path() -> None:
    assert format_rules_path(".") == Path(".cursor/rules/rules-kit")
    assert format_rules_path("/repo") == Path("/repo/.cursor/rules/rules-kit")


def test_rules_root_uses_cursor_path(tmp_path: Path) -> None:
    run = RunContext(stack="laravel", workspace=tmp_path, cursor_path="backend")
    assert rules_root(run) == tmp_path / "backend" / ".cursor" / "rules" / "rules-kit"
    run = RunContext(stack="laravel", workspace=tmp_path)
    assert rules_root(run) == tmp_path / ".cursor" / "rules" / "rules-kit"


def test_substitute_replaces_all_occurrences() -> None:
    body = "{stack} and {stack} at {projectPath}"
    assert substitute(body, {"stack": "laravel", "projectPath": "./"}) == "laravel and laravel at ./"


def test_missing_or_empty_values_leave_placeholder() -> None:
    body = "v{detectedVersion} r{versionRange} c{cursorPath}"
    assert substitute(body, {"detectedVersion": None, "versionRange": "", "cursorPath": "."}) == (
        "v{detectedVersion} r{versionRange} c."
    )


def test_unknown_placeholders_are_untouched() -> None:
    assert substitute("{unknown} {{stack}}", {"stack": "vue", "unknown": "x"}) == "{unknown} {vue}"


def test_substitute_for_run_prefers_formatted_version_name(tmp_path: Path) -> None:
    run = RunContext(
        stack="laravel",
        detected_version="11",
        version_range="v10-11",
        formatted_version_name="Laravel 10-11",
        project_path=".",
        workspace=tmp_path,
    )
    body = "{stackFormatted} {detectedVersion} ({versionRange}) in {projectPath}"
    assert substitute_for_run(body, run) == "Laravel 11 (Laravel 10-11) in ./"


def test_substitute_for_run_falls_back_to_raw_range(tmp_path: Path) -> None:
    run = RunContext(stack="react", version_range="v18", workspace=tmp_path, architecture=None)
    assert substitute_for_run("{versionRange} {architecture}", run) == "v18 {architecture}"
