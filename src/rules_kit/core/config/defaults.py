"""Built-in kit configuration used when no configuration document can be read."""
from __future__ import annotations

import copy
from typing import Any, Dict

_DEFAULT_CONFIG: Dict[str, Any] = {
    "global": {
        "always": ["README.md", "CONTRIBUTING.md"],
    },
    "laravel": {
        "version_ranges": {
            "8": {"range_name": "v8-9", "name": "Laravel 8-9"},
            "9": {"range_name": "v8-9", "name": "Laravel 8-9"},
            "10": {"range_name": "v10-11", "name": "Laravel 10-11"},
            "11": {"range_name": "v10-11", "name": "Laravel 10-11"},
        },
        "globs": [
            "<root>/app/**/*.php",
            "<root>/routes/**/*.php",
            "<root>/config/**/*.php",
        ],
        "pattern_rules": {
            "<root>/app/Http/Controllers/**/*.php": ["controllers/controller-methods.md"],
            "<root>/app/Models/**/*.php": ["models/eloquent-best-practices.md"],
            "<root>/routes/**/*.php": ["routes/route-organization.md"],
        },
        "architectures": {
            "standard": {
                "name": "Standard Laravel (MVC with Repositories)",
                "globs": ["<root>/app/**/*.php"],
            },
        },
    },
    "nextjs": {
        "version_ranges": {
            "12": {"range_name": "v12", "name": "Next.js 12"},
            "13": {"range_name": "v13", "name": "Next.js 13"},
            "14": {"range_name": "v14", "name": "Next.js 14"},
        },
        "globs": [
            "<root>/app/**/*.{js,jsx,ts,tsx}",
            "<root>/pages/**/*.{js,jsx,ts,tsx}",
            "<root>/src/**/*.{js,jsx,ts,tsx}",
        ],
        "pattern_rules": {
            "<root>/app/**/*.{js,jsx,ts,tsx}": ["app-dir/route-handlers.md"],
            "<root>/pages/api/**/*.{js,jsx,ts,tsx}": ["pages/api-routes.md"],
        },
        "architectures": {
            "app": {"name": "App Router", "globs": ["<root>/app/**/*.{js,jsx,ts,tsx}"]},
            "pages": {"name": "Pages Router", "globs": ["<root>/pages/**/*.{js,jsx,ts,tsx}"]},
        },
    },
    "react": {
        "version_ranges": {
            "17": {"range_name": "v17", "name": "React 17"},
            "18": {"range_name": "v18", "name": "React 18"},
        },
        "globs": ["<root>/src/**/*.{js,jsx,ts,tsx}"],
        "architectures": {
            "standard": {
                "name": "Standard Component Structure",
                "globs": ["<root>/src/**/*.{js,jsx,ts,tsx}"],
            },
        },
    },
}


def default_config_mapping() -> Dict[str, Any]:
    """Return a fresh copy of the built-in configuration document."""
    return copy.deepcopy(_DEFAULT_CONFIG)


__all__ = ["default_config_mapping"]
