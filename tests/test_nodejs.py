import json

import pytest

from codedoc.models import Dependency, Project
from codedoc.nodejs import NodeJSParser


@pytest.fixture
def parser():
    return NodeJSParser()


def write_package(root, **sections):
    (root / "package.json").write_text(json.dumps(sections), encoding="utf-8")


def test_overview_uses_readme(parser, tmp_path):
    line = "This project serves widgets over HTTP for everyone."
    (tmp_path / "README.md").write_text(f"# Title\n\n{line}\n", encoding="utf-8")
    assert parser.generate_overview("app", tmp_path) == f"app: {line}"


def test_overview_without_readme(parser, tmp_path):
    assert parser.generate_overview("app", tmp_path) == (
        "app: Node.js application with modern JavaScript/TypeScript stack"
    )


def test_tech_stack_from_files_and_package(parser, tmp_path):
    write_package(tmp_path, dependencies={"express": "^4.0.0", "typescript": "^5.0.0"})
    (tmp_path / "jest.config.js").write_text("module.exports = {}", encoding="utf-8")
    stack = parser.analyze_tech_stack(tmp_path)
    assert stack[0] == "Node.js"
    for tech in ("Check dependencies", "Jest", "Express", "TypeScript"):
        assert tech in stack
    assert len(stack) == len(set(stack))


def test_tech_stack_ignores_dev_dependencies_and_bad_manifest(parser, tmp_path):
    write_package(tmp_path, devDependencies={"react": "18"})
    assert "React" not in parser.analyze_tech_stack(tmp_path)
    (tmp_path / "package.json").write_text("{not json", encoding="utf-8")
    assert "Express" not in parser.analyze_tech_stack(tmp_path)


def test_folder_structure_adds_node_folders(parser, tmp_path):
    (tmp_path / "src").mkdir()
    structure = parser.analyze_folder_structure(tmp_path)
    assert structure["src/"] == "Main source code files"
    assert structure["node_modules/"] == "Node.js dependencies"
    assert structure["__tests__/"] == "Jest test files"


def test_folder_structure_keeps_existing_entry(parser, tmp_path):
    (tmp_path / "node_modules").mkdir()
    structure = parser.analyze_folder_structure(tmp_path)
    assert structure["node_modules/"] == "Project-specific directory"


def test_extract_express_routes(parser):
    content = (
        "app.get('/users?page=1', listUsers)\n"
        '  router.post("/items", createItem)\n'
        "console.log('hello')\n"
        "app.put(handler)\n"
    )
    endpoints = parser.extract_express_routes(content)
    assert [(ep.method, ep.path) for ep in endpoints] == [("GET", "/users"), ("POST", "/items")]
    assert endpoints[0].description == "Express GET endpoint"
    assert endpoints[1].curl_example == "curl -X POST http://localhost:3000/items"


def test_extract_api_endpoints_from_route_files(parser, tmp_path):
    routes = tmp_path / "routes"
    routes.mkdir()
    (routes / "users.js").write_text("router.delete('/users/:id', remove)\n", encoding="utf-8")
    (tmp_path / "server.js").write_text("app.get('/health', ok)\n", encoding="utf-8")
    endpoints = parser.extract_api_endpoints(tmp_path)
    assert [(ep.method, ep.path) for ep in endpoints] == [
        ("DELETE", "/users/:id"),
        ("GET", "/health"),
    ]


def test_extract_api_endpoints_default(parser, tmp_path):
    endpoints = parser.extract_api_endpoints(tmp_path)
    assert len(endpoints) == 1
    assert endpoints[0].method == "GET"
    assert endpoints[0].path == "/"
    assert endpoints[0].description == "Default home endpoint"
    assert endpoints[0].curl_example == "curl http://localhost:3000"


def test_detect_external_services(parser, tmp_path):
    write_package(tmp_path, dependencies={"mongoose": "^7.0.0"})
    (tmp_path / ".env").write_text("REDIS_URL=redis://localhost\n", encoding="utf-8")
    services = parser.detect_external_services(tmp_path)
    for service in ("mongoose", "Redis", "REDIS_URL"):
        assert service in services
    assert len(services) == len(set(services))


def test_deployment_info(parser, tmp_path):
    plain = parser.deployment_info(tmp_path)
    assert plain[0] == "Node.js applications can be deployed using:"
    assert not any("Detected" in item for item in plain)
    (tmp_path / "Dockerfile").write_text("FROM node\n", encoding="utf-8")
    (tmp_path / "serverless.yml").write_text("service: x\n", encoding="utf-8")
    detected = parser.deployment_info(tmp_path)
    assert detected[:len(plain)] == plain
    assert detected[-2] == "\nDetected Dockerfile - can be built with `docker build .`"
    assert detected[-1] == "\nDetected serverless.yml - deploy with `serverless deploy`"


def test_developer_notes_typescript(parser, tmp_path):
    base = parser.developer_notes(tmp_path)
    (tmp_path / "tsconfig.json").write_text("{}", encoding="utf-8")
    notes = parser.developer_notes(tmp_path)
    assert notes[:-1] == base
    assert notes[-1] == "TypeScript project - compile with tsc or use ts-node for development"


def test_parse_dependencies(parser, tmp_path):
    write_package(
        tmp_path,
        dependencies={"express": "^4.0.0"},
        devDependencies={"jest": "^29.0.0"},
        peerDependencies={"react": ">=18"},
    )
    project = Project()
    parser.parse_dependencies(tmp_path, project)
    assert project.dependencies["production"] == [Dependency("express", "^4.0.0", "production")]
    assert project.dependencies["development"] == [Dependency("jest", "^29.0.0", "development")]
    assert project.dependencies["peer"] == [Dependency("react", ">=18", "peer")]


def test_parse_dependencies_missing_manifest(parser, tmp_path):
    with pytest.raises(FileNotFoundError):
        parser.parse_dependencies(tmp_path, Project())


@pytest.mark.parametrize("text", ["{broken", "[]", '{"dependencies": ["express"]}'])
def test_parse_dependencies_invalid_manifest(parser, tmp_path, text):
    (tmp_path / "package.json").write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        parser.parse_dependencies(tmp_path, Project())


def test_sample_output(parser, tmp_path):
    sample = json.loads(parser.generate_sample_output(tmp_path))
    assert sample["project"]["type"] == "Node.js"
    assert sample["project"]["name"] == "example-node-app"
    assert sample["dependencies"]["express"] == "^4.17.1"
    assert sample["endpoints"][0]["path"] == "/api/users"


def test_static_descriptions(parser):
    assert "Run `npm install` to install dependencies" in parser.setup_instructions()
    assert parser.architecture().startswith("Client → Router → Middleware")
    assert parser.data_flow().startswith("1. HTTP Request")
    assert "package.json" in parser.parser_details()
    assert "Add TypeScript type analysis" in parser.roadmap()
    assert "Module not found - run npm install" in parser.common_issues()
    assert "Middleware architecture" in parser.key_concepts()