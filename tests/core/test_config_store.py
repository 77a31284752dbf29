from __future__ import annotations

from pathlib import Path

import yaml

from rules_kit.core.config import RuleConfig, RuleConfigStore
from rules_kit.core.results import ReadStatus


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_config_falls_back_to_defaults(tmp_path: Path) -> None:
    store = RuleConfigStore(tmp_path)
    result = store.load_result()

    assert result.status is ReadStatus.ABSENT
    assert result.from_defaults
    assert "laravel" in result.config.stacks
    assert result.config.always == ("README.md", "CONTRIBUTING.md")


def test_malformed_yaml_is_treated_like_absent(tmp_path: Path) -> None:
    _write(tmp_path / "kit-config.yaml", "laravel: [unclosed\n")
    result = RuleConfigStore(tmp_path).load_result()

    assert result.status is ReadStatus.MALFORMED
    assert result.path == tmp_path / "kit-config.yaml"
    assert "laravel" in result.config.stacks


def test_non_mapping_document_is_malformed(tmp_path: Path) -> None:
    _write(tmp_path / "kit-config.yaml", "- just\n- a list\n")
    result = RuleConfigStore(tmp_path).load_result()
    assert result.status is ReadStatus.MALFORMED


def test_json_config_is_read(tmp_path: Path) -> None:
    _write(tmp_path / "kit-config.json", '{"global": {"always": ["a.md"]}, "vue": {"globs": ["<root>/src/**/*.vue"]}}')
    config = RuleConfigStore(tmp_path).load()

    assert config.always == ("a.md",)
    assert config.stack("vue").globs == ("<root>/src/**/*.vue",)


def test_yaml_takes_precedence_over_json(tmp_path: Path) -> None:
    _write(tmp_path / "kit-config.json", '{"global": {"always": ["json.md"]}}')
    _write(tmp_path / "kit-config.yaml", "global:\n  always: [yaml.md]\n")
    assert RuleConfigStore(tmp_path).load().always == ("yaml.md",)


def test_load_is_memoized_and_ignores_later_directory(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    _write(first / "kit-config.yaml", "global:\n  always: [first.md]\n")
    _write(second / "kit-config.yaml", "global:\n  always: [second.md]\n")

    store = RuleConfigStore(first)
    assert store.load().always == ("first.md",)
    assert store.load(second).always == ("first.md",)


def test_reload_rereads_the_document(tmp_path: Path) -> None:
    path = _write(tmp_path / "kit-config.yaml", "global:\n  always: [one.md]\n")
    store = RuleConfigStore(tmp_path)
    assert store.load().always == ("one.md",)

    path.write_text("global:\n  always: [two.md]\n", encoding="utf-8")
    assert store.load().always == ("one.md",)
    assert store.reload().always == ("two.md",)


def test_stores_are_independent(tmp_path: Path) -> None:
    a = tmp_path / "a"
    b = tmp_path / "b"
    _write(a / "kit-config.yaml", "global:\n  always: [a.md]\n")
    _write(b / "kit-config.yaml", "global:\n  always: [b.md]\n")

    assert RuleConfigStore(a).load().always == ("a.md",)
    assert RuleConfigStore(b).load().always == ("b.md",)


def test_save_writes_document_and_updates_memo(tmp_path: Path) -> None:
    _write(
        tmp_path / "kit-config.yaml",
        "global:\n  always: [a.md]\nlaravel:\n  globs: ['<root>/app/**/*.php']\n  custom_key: kept\n",
    )
    store = RuleConfigStore(tmp_path)
    updated = store.load().with_always(["a.md", "b.md"])

    assert store.save(updated) is True
    assert store.load().always == ("a.md", "b.md")

    data = yaml.safe_load((tmp_path / "kit-config.yaml").read_text(encoding="utf-8"))
    assert data["global"]["always"] == ["a.md", "b.md"]
    assert data["laravel"]["globs"] == ["<root>/app/**/*.php"]
    assert data["laravel"]["custom_key"] == "kept"


def test_save_without_existing_file_creates_yaml(tmp_path: Path) -> None:
    store = RuleConfigStore(tmp_path)
    config = RuleConfig.from_mapping({"global": {"always": ["x.md"]}})

    assert store.save(config) is True
    assert (tmp_path / "kit-config.yaml").is_file()
    assert store.reload().always == ("x.md",)


def test_failed_save_returns_false_and_keeps_memo(tmp_path: Path) -> None:
    # A regular file where the library directory should be makes writing impossible
    blocker = _write(tmp_path / "blocker", "not a directory")
    store = RuleConfigStore(blocker)
    before = store.load()

    assert store.save(RuleConfig.from_mapping({"global": {"always": ["x.md"]}})) is False
    assert store.load() is before
