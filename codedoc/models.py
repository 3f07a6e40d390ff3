"""Data describing an analysed project and its processing jobs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class APIEndpoint:
    method: str = ""
    path: str = ""
    middleware: list[str] = field(default_factory=list)
    handler: str = ""
    description: str = ""
    curl_example: str = ""


@dataclass
class Dependency:
    name: str = ""
    version: str = ""
    type: str = ""


@dataclass
class FileInfo:
    name: str = ""
    path: str = ""
    extension: str = ""
    size: int = 0
    language: str = ""


@dataclass
class DirectoryNode:
    name: str = ""
    path: str = ""
    is_dir: bool = False
    size: int = 0
    children: list[DirectoryNode] = field(default_factory=list)


def _node_dict(node: DirectoryNode) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": node.name,
        "path": node.path,
        "is_dir": node.is_dir,
        "size": node.size,
    }
    if node.children:
        data["children"] = [_node_dict(child) for child in node.children]
    return data


@dataclass
class Project:
    """Everything the analyser learns about a codebase."""

    name: str = ""
    type: str = ""
    path: str = ""
    overview: str = ""
    tech_stack: list[str] = field(default_factory=list)
    architecture: str = ""
    folder_structure: dict[str, str] = field(default_factory=dict)
    setup_instructions: list[str] = field(default_factory=list)
    api_endpoints: list[APIEndpoint] = field(default_factory=list)
    parsers_info: dict[str, str] = field(default_factory=dict)
    data_flow: str = ""
    external_services: list[str] = field(default_factory=list)
    deployment_info: list[str] = field(default_factory=list)
    future_roadmap: list[str] = field(default_factory=list)
    common_issues: list[str] = field(default_factory=list)
    developer_notes: list[str] = field(default_factory=list)
    key_concepts: list[str] = field(default_factory=list)
    sample_output: str = ""
    dependencies: dict[str, list[Dependency]] = field(default_factory=dict)
    files: list[FileInfo] = field(default_factory=list)
    structure: list[DirectoryNode] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the project."""
        data = asdict(self)
        data["structure"] = [_node_dict(node) for node in self.structure]
        data["created_at"] = self.created_at.isoformat()
        return data


@dataclass
class Job:
    id: str = ""
    status: str = ""
    progress: int = 0
    message: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)