import json
from datetime import datetime, timezone

from codedoc.models import (
    APIEndpoint,
    Dependency,
    DirectoryNode,
    FileInfo,
    Job,
    Project,
)


def _project():
    return Project(
        name="demo",
        type="Node.js",
        tech_stack=["Node.js", "Express"],
        api_endpoints=[APIEndpoint(method="GET", path="/", middleware=["auth"])],
        dependencies={"production": [Dependency("express", "^4.17.1", "production")]},
        files=[FileInfo(name="app.js", path="app.js", extension=".js", size=12, language="JavaScript")],
        structure=[
            DirectoryNode(
                name="src",
                path="src",
                is_dir=True,
                children=[DirectoryNode(name="a.js", path="src/a.js", size=3)],
            )
        ],
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


def test_to_dict_uses_json_field_names():
    data = _project().to_dict()
    for key in (
        "name", "type", "path", "overview", "tech_stack", "architecture",
        "folder_structure", "setup_instructions", "api_endpoints", "parsers_info",
        "data_flow", "external_services", "deployment_info", "future_roadmap",
        "common_issues", "developer_notes", "dependencies", "files", "structure",
        "created_at",
    ):
        assert key in data


def test_to_dict_nested_values():
    data = _project().to_dict()
    assert data["dependencies"]["production"][0] == {
        "name": "express", "version": "^4.17.1", "type": "production"
    }
    assert data["api_endpoints"][0]["middleware"] == ["auth"]
    assert data["files"][0]["size"] == 12


def test_empty_children_are_omitted():
    structure = _project().to_dict()["structure"]
    assert structure[0]["children"][0]["name"] == "a.js"
    assert "children" not in structure[0]["children"][0]


def test_created_at_round_trips():
    project = _project()
    stamp = project.to_dict()["created_at"]
    assert datetime.fromisoformat(stamp) == project.created_at


def test_to_dict_is_json_serialisable():
    text = json.dumps(_project().to_dict())
    assert json.loads(text)["name"] == "demo"


def test_default_collections_are_independent():
    first, second = Project(), Project()
    first.tech_stack.append("Go")
    assert second.tech_stack == []


def test_job_fields():
    stamp = datetime(2024, 5, 6, tzinfo=timezone.utc)
    job = Job(id="abc", status="processing", progress=10, created_at=stamp, updated_at=stamp)
    assert job == Job(id="abc", status="processing", progress=10, created_at=stamp, updated_at=stamp)
    assert job.status == "processing"