"""Guessing the kind of project a directory holds."""

from __future__ import annotations

import os
from collections import Counter
from pathlib import Path

GENERIC = "Generic"

PROJECT_INDICATORS: dict[str, tuple[str, ...]] = {
    "Node.js": ("package.json", "node_modules"),
    "Python": ("requirements.txt", "setup.py", "Pipfile"),
    "PHP/Laravel": ("composer.json", "artisan", "vendor"),
    "Go": ("go.mod", "go.sum"),
    "Java": ("pom.xml", "build.gradle", "src/main/java"),
    "Ruby/Rails": ("Gemfile", "config.ru", "app/models"),
    ".NET": ("*.csproj", "*.sln", "Program.cs"),
}

EXTENSION_TYPES: dict[str, str] = {
    ".js": "Node.js",
    ".ts": "Node.js",
    ".jsx": "Node.js",
    ".tsx": "Node.js",
    ".py": "Python",
    ".php": "PHP/Laravel",
    ".go": "Go",
    ".java": "Java",
    ".rb": "Ruby/Rails",
    ".cs": ".NET",
}


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def detect_project_type(project_path: str | os.PathLike[str]) -> str:
    """Return the project type of project_path.

    Marker files decide first; otherwise the type whose source files are most
    numerous wins, and "Generic" is returned when nothing is recognised.
    """
    root = Path(project_path)
    for project_type, markers in PROJECT_INDICATORS.items():
        if any(os.path.lexists(root / marker) for marker in markers):
            return project_type

    counts: Counter[str] = Counter()
    for _, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            project_type = EXTENSION_TYPES.get(_extension(filename).lower())
            if project_type:
                counts[project_type] += 1

    if not counts:
        return GENERIC
    return max(counts, key=counts.__getitem__)