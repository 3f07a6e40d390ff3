"""Analysis helpers shared by every language-specific parser."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping, Sequence


def _pairs(text: str) -> dict[str, str]:
    """Build a mapping from lines written as ``key | value``."""
    table: dict[str, str] = {}
    for line in text.strip().splitlines():
        key, _, value = line.partition("|")
        table[key.strip()] = value.strip()
    return table


README_FILES: tuple[str, ...] = ("README.md", "readme.md", "README.txt", "readme.txt", "README")
README_SUMMARY_LIMIT = 150
README_MIN_LENGTH = 10

SKIP_DIRS: tuple[str, ...] = tuple(
    "node_modules vendor .git dist build __pycache__ .idea .vscode".split()
)
SKIP_FILES: tuple[str, ...] = (".DS_Store", "Thumbs.db")

QUOTE_CHARS: tuple[str, ...] = ("'", '"', "`")

SERVICE_KEYWORDS: dict[str, str] = _pairs(
    """
    postgres    | PostgreSQL
    mysql       | MySQL
    mongodb     | MongoDB
    redis       | Redis
    aws         | AWS
    stripe      | Stripe
    sendgrid    | SendGrid
    twilio      | Twilio
    firebase    | Firebase
    elastic     | Elasticsearch
    kafka       | Kafka
    rabbitmq    | RabbitMQ
    googlecloud | Google Cloud
    azure       | Microsoft Azure
    """
)

DIR_DESCRIPTIONS: dict[str, str] = _pairs(
    """
    src         | Main source code files
    lib         | Library and utility code
    test        | Test files
    config      | Configuration files
    public      | Publicly accessible assets
    assets      | Static assets (images, styles)
    migrations  | Database migration files
    models      | Data models and schemas
    controllers | Application controllers
    middleware  | Middleware functions
    routes      | Route definitions
    services    | Business logic services
    utils       | Utility functions
    views       | Templates and views
    dist        | Compiled/bundled output
    build       | Build artifacts
    docs        | Documentation files
    scripts     | Utility scripts
    seeds       | Database seed data
    fixtures    | Test fixtures
    locales     | Localization files
    logs        | Application logs
    tmp         | Temporary files
    """
)
GENERIC_DIR_DESCRIPTION = "Project-specific directory"


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def _closing_quote(text: str, quote: str) -> int:
    """Index of the first unescaped quote in text, or -1."""
    escaped = False
    for index, char in enumerate(text):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == quote:
            return index
    return -1


def _summary_line(content: str) -> str:
    """First line that is neither blank, a heading, nor too short; shortened if long."""
    for raw in content.split("\n"):
        line = raw.strip()
        if not line or line.startswith("#") or len(line) <= README_MIN_LENGTH:
            continue
        if len(line) > README_SUMMARY_LIMIT:
            return f"{line[:README_SUMMARY_LIMIT]}..."
        return line
    return ""


class BaseParser:
    """Common functionality for the project parsers."""

    def read_readme(self, project_path: str | os.PathLike[str]) -> str:
        """Return the first descriptive line of the project's README, or ""."""
        root = Path(project_path)
        for filename in README_FILES:
            content = _read_text(root / filename)
            if content is None:
                continue
            summary = _summary_line(content)
            if summary:
                return summary
        return ""

    def should_skip(self, path: str | os.PathLike[str]) -> bool:
        """Tell whether a file or directory is noise that analysis should ignore."""
        name = os.path.basename(os.path.normpath(os.fspath(path)))
        folded = name.casefold()
        candidates = SKIP_DIRS if os.path.isdir(path) else SKIP_FILES
        if any(folded == candidate.casefold() for candidate in candidates):
            return True
        return name.startswith(".")

    def extract_path_from_content(self, content: str) -> str:
        """Return the first non-empty quoted string in content, without query or call suffix."""
        for quote in QUOTE_CHARS:
            start = content.find(quote)
            while start != -1:
                remaining = content[start + 1 :]
                end = _closing_quote(remaining, quote)
                if end == -1:
                    break
                candidate = remaining[:end].split("?", 1)[0].split("(", 1)[0].strip()
                if candidate:
                    return candidate
                following = remaining[end + 1 :].find(quote)
                if following == -1:
                    break
                start += end + following + 2
        return ""

    def scan_external_services(
        self,
        project_path: str | os.PathLike[str],
        config_files: Mapping[str, Sequence[str]],
    ) -> list[str]:
        """Find external services mentioned in the given configuration files.

        Each file is searched for well-known service names and for its own
        extra keywords; keywords that match are reported as written.
        """
        root = Path(project_path)
        found: list[str] = []
        for config_file, keywords in config_files.items():
            content = _read_text(root / config_file)
            if content is None:
                continue
            lowered = content.lower()
            found.extend(
                service for keyword, service in SERVICE_KEYWORDS.items() if keyword in lowered
            )
            found.extend(keyword for keyword in keywords if keyword.lower() in lowered)
        return self.remove_duplicates(found)

    def remove_duplicates(self, items: Iterable[str]) -> list[str]:
        """Drop repeated items, keeping the first occurrence of each."""
        return list(dict.fromkeys(items))

    def analyze_folder_structure(self, project_path: str | os.PathLike[str]) -> dict[str, str]:
        """Describe every directory below project_path, keyed by relative path ending in "/"."""
        root = Path(project_path)
        structure: dict[str, str] = {}
        for current, dirnames, _ in os.walk(root):
            dirnames.sort()
            current_path = Path(current)
            for dirname in list(dirnames):
                directory = current_path / dirname
                if directory.is_symlink():
                    dirnames.remove(dirname)
                    continue
                relative = directory.relative_to(root).as_posix()
                structure[f"{relative}/"] = DIR_DESCRIPTIONS.get(
                    dirname.lower(), GENERIC_DIR_DESCRIPTION
                )
        return structure