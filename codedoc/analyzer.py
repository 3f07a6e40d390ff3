"""Project analysis: choosing a parser and collecting its findings."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Mapping, Protocol

from codedoc.baseparser import BaseParser
from codedoc.detection import EXTENSION_TYPES, GENERIC, detect_project_type
from codedoc.models import APIEndpoint, Dependency, Project
from codedoc.nodejs import NodeJSParser

PathLike = "str | os.PathLike[str]"

_REQUIREMENT = re.compile(r"^([A-Za-z0-9][A-Za-z0-9_.\-]*(?:\[[^\]]*\])?)\s*(.*)$")


class AnalysisError(Exception):
    """Raised when a project cannot be analysed."""


class _ProjectParser(Protocol):
    def generate_overview(self, name: str, project_path: str | os.PathLike[str]) -> str: ...
    def key_concepts(self) -> list[str]: ...
    def architecture(self) -> str: ...
    def analyze_tech_stack(self, project_path: str | os.PathLike[str]) -> list[str]: ...
    def analyze_folder_structure(
        self, project_path: str | os.PathLike[str]
    ) -> dict[str, str]: ...
    def setup_instructions(self) -> list[str]: ...
    def extract_api_endpoints(
        self, project_path: str | os.PathLike[str]
    ) -> list[APIEndpoint]: ...
    def parser_details(self) -> dict[str, str]: ...
    def data_flow(self) -> str: ...
    def detect_external_services(self, project_path: str | os.PathLike[str]) -> list[str]: ...
    def deployment_info(self, project_path: str | os.PathLike[str]) -> list[str]: ...
    def roadmap(self) -> list[str]: ...
    def common_issues(self) -> list[str]: ...
    def developer_notes(self, project_path: str | os.PathLike[str]) -> list[str]: ...
    def parse_dependencies(
        self, project_path: str | os.PathLike[str], project: Project
    ) -> None: ...
    def generate_sample_output(self, project_path: str | os.PathLike[str]) -> str: ...


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _source_files(root: Path) -> list[str]:
    names: list[str] = []
    for _, dirnames, filenames in os.walk(root):
        dirnames.sort()
        names.extend(sorted(filenames))
    return names


class GenericParser(BaseParser):
    """Parser for projects without a dedicated analyser."""

    def generate_overview(self, name: str, project_path: str | os.PathLike[str]) -> str:
        readme = self.read_readme(project_path)
        if readme:
            return f"{name}: {readme}"
        return f"{name}: Software project"

    def key_concepts(self) -> list[str]:
        return [
            "Directory structure analysis",
            "Language detection from file extensions",
            "README summary extraction",
            "Configuration file scanning for external services",
        ]

    def architecture(self) -> str:
        return "Entry Point → Application Logic → Data Storage"

    def analyze_tech_stack(self, project_path: str | os.PathLike[str]) -> list[str]:
        """List the languages whose source files appear in the project."""
        languages = (
            EXTENSION_TYPES.get(_extension(name).lower()) for name in _source_files(Path(project_path))
        )
        return self.remove_duplicates(language for language in languages if language)

    def setup_instructions(self) -> list[str]:
        return [
            "Read the README for project-specific requirements",
            "Install the toolchain for the project's language",
            "Install the project's dependencies",
            "Build and run the project",
        ]

    def extract_api_endpoints(self, project_path: str | os.PathLike[str]) -> list[APIEndpoint]:
        return []

    def parser_details(self) -> dict[str, str]:
        return {
            "Generic": "Walks the file tree, counts files by extension and reads README files",
        }

    def data_flow(self) -> str:
        return "1. Input → 2. Processing → 3. Output"

    def detect_external_services(self, project_path: str | os.PathLike[str]) -> list[str]:
        return self.scan_external_services(
            project_path, {".env": (), "docker-compose.yml": (), "requirements.txt": ()}
        )

    def deployment_info(self, project_path: str | os.PathLike[str]) -> list[str]:
        deployment = ["Deployment depends on the project's language and runtime."]
        if (Path(project_path) / "Dockerfile").exists():
            deployment.append("\nDetected Dockerfile - can be built with `docker build .`")
        return deployment

    def roadmap(self) -> list[str]:
        return [
            "Add a dedicated parser for this project type",
            "Extract API endpoints from source files",
        ]

    def common_issues(self) -> list[str]:
        return [
            "Missing toolchain - install the language runtime the project needs",
            "Missing configuration - check for example configuration files",
        ]

    def developer_notes(self, project_path: str | os.PathLike[str]) -> list[str]:
        notes = ["Keep the README up to date with setup and usage instructions"]
        if (Path(project_path) / ".env.example").exists():
            notes.append("Copy .env.example to .env and fill in the values")
        return notes

    def parse_dependencies(self, project_path: str | os.PathLike[str], project: Project) -> None:
        """Add the packages pinned in requirements.txt, if the project has one."""
        try:
            content = (Path(project_path) / "requirements.txt").read_text(
                encoding="utf-8", errors="replace"
            )
        except OSError:
            return
        for raw in content.split("\n"):
            line = raw.split("#", 1)[0].strip()
            if not line or line.startswith("-"):
                continue
            match = _REQUIREMENT.match(line)
            if match is None:
                continue
            name, spec = match.groups()
            project.dependencies.setdefault("production", []).append(
                Dependency(name=name, version=spec.strip() or "*", type="production")
            )

    def generate_sample_output(self, project_path: str | os.PathLike[str]) -> str:
        root = Path(project_path)
        sample = {
            "project": {
                "name": os.path.basename(os.path.normpath(os.fspath(root))),
                "type": GENERIC,
                "file_count": len(_source_files(root)),
            }
        }
        return json.dumps(sample, indent=2, sort_keys=True, ensure_ascii=False)


def _default_parsers() -> dict[str, _ProjectParser]:
    return {"Node.js": NodeJSParser(), GENERIC: GenericParser()}


class FileAnalyzer:
    """Detects a project's type and gathers documentation material for it."""

    def __init__(self, parsers: Mapping[str, _ProjectParser] | None = None) -> None:
        self.parsers: dict[str, _ProjectParser] = dict(parsers or _default_parsers())
        self.parsers.setdefault(GENERIC, GenericParser())

    def analyze_project(self, project_path: str | os.PathLike[str]) -> Project:
        """Analyse the project at project_path.

        Raises AnalysisError when its dependencies cannot be read.
        """
        name = os.path.basename(os.path.normpath(os.fspath(project_path)))
        project = Project(name=name, path=os.fspath(project_path))
        project.type = detect_project_type(project_path)
        parser = self.parsers.get(project.type, self.parsers[GENERIC])

        project.overview = parser.generate_overview(name, project_path)
        project.key_concepts = parser.key_concepts()
        project.architecture = parser.architecture()
        project.tech_stack = parser.analyze_tech_stack(project_path)
        project.folder_structure = parser.analyze_folder_structure(project_path)
        project.setup_instructions = parser.setup_instructions()
        project.api_endpoints = parser.extract_api_endpoints(project_path)
        project.parsers_info = parser.parser_details()
        project.data_flow = parser.data_flow()
        project.external_services = parser.detect_external_services(project_path)
        project.deployment_info = parser.deployment_info(project_path)
        project.future_roadmap = parser.roadmap()
        project.common_issues = parser.common_issues()
        project.developer_notes = parser.developer_notes(project_path)

        try:
            parser.parse_dependencies(project_path, project)
        except (OSError, ValueError) as exc:
            raise AnalysisError(f"dependency parsing failed: {exc}") from exc

        project.sample_output = parser.generate_sample_output(project_path)
        return project