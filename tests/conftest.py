import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'rules_kit' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from rules_kit.core.stdlib_logging import reset_stdlib_logging_for_tests
from helpers.templates import TemplateLibrary


_ENV_KEYS = (
    "RULES_KIT_TEMPLATES_DIR",
    "RULES_KIT_BATCH_SIZE",
    "RULES_KIT_CACHE_MAX_SIZE",
    "RULES_KIT_CACHE_TTL_SECONDS",
    "RULES_KIT_INCREMENTAL",
    "RULES_KIT_CLI_PROGRESS",
)


@pytest.fixture(autouse=True)
def _isolate_rules_kit_env(monkeypatch: pytest.MonkeyPatch):
    """Tests never see RULES_KIT_* overrides from the developer shell."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def library(tmp_path: Path) -> TemplateLibrary:
    """An empty template library root under tmp_path."""
    return TemplateLibrary(tmp_path / "templates")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Project directory the rules are written into."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def laravel_library(library: TemplateLibrary) -> TemplateLibrary:
    """A small Laravel library with global, base, version and architecture tiers."""
    library.write_config(
        {
            "global": {"always": ["code-standards.md"]},
            "laravel": {
                "globs": ["<root>/app/**/*.php", "<root>/routes/**/*.php"],
                "pattern_rules": {
                    "<root>/app/Http/Controllers/**/*.php": ["controllers/controller-methods.md"],
                },
                "architectures": {
                    "ddd": {
                        "name": "Domain-Driven Design",
                        "globs": ["<root>/src/Domain/**/*.php"],
                    },
                },
                "version_ranges": {
                    "10": {"range_name": "v10-11", "name": "Laravel 10-11"},
                    "11": {"range_name": "v10-11", "name": "Laravel 10-11"},
                },
            },
        }
    )
    library.global_rule("code-standards.md", "# Code Standards\n")
    library.global_rule("git-workflow.md", "# Git Workflow\n")
    library.base("laravel", "best-practices.md", "# Best practices for {stack}\n")
    library.base("laravel", "controller-methods.md", "# Controllers\n")
    library.version("laravel", "v10-11", "best-practices.md", "Use {detectedVersion} features.\n")
    library.architecture("laravel", "ddd", "aggregates.md", "# Aggregates\n")
    return library
