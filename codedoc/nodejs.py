"""Analysis of Node.js projects."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from codedoc.baseparser import BaseParser
from codedoc.models import APIEndpoint, Dependency, Project


def _table(text: str) -> dict[str, str]:
    """Build a mapping from lines written as ``key | value``."""
    table: dict[str, str] = {}
    for line in text.strip().splitlines():
        key, _, value = line.partition("|")
        table[key.strip()] = value.strip()
    return table


def _lines(text: str) -> list[str]:
    """The non-blank lines of text, stripped."""
    return [line.strip() for line in text.strip().splitlines() if line.strip()]


FRAMEWORK_FILES: dict[str, str] = _table(
    """
    package.json      | Check dependencies
    next.config.js    | Next.js
    nuxt.config.js    | Nuxt.js
    vue.config.js     | Vue.js
    angular.json      | Angular
    svelte.config.js  | Svelte
    remix.config.js   | Remix
    nest-cli.json     | NestJS
    serverless.yml    | Serverless Framework
    webpack.config.js | Webpack
    rollup.config.js  | Rollup
    vite.config.js    | Vite
    jest.config.js    | Jest
    mocha.opts        | Mocha
    """
)

PACKAGE_FRAMEWORKS: dict[str, str] = _table(
    """
    express    | Express
    koa        | Koa
    fastify    | Fastify
    react      | React
    typescript | TypeScript
    """
)

NODE_FOLDERS: dict[str, str] = _table(
    """
    node_modules/ | Node.js dependencies
    types/        | TypeScript type definitions
    __tests__/    | Jest test files
    .next/        | Next.js build output
    .nuxt/        | Nuxt.js build output
    """
)

ROUTE_FILE_PATTERNS: tuple[str, ...] = tuple(
    f"{stem}.{ext}" for stem in ("src/routes/*", "routes/*", "app", "server") for ext in ("js", "ts")
)

ROUTE_METHODS: tuple[tuple[str, str], ...] = tuple(
    (f".{verb.lower()}(", verb) for verb in ("GET", "POST", "PUT", "DELETE")
)

SERVICE_CONFIG_FILES: dict[str, tuple[str, ...]] = {
    "package.json": tuple("mongoose sequelize typeorm redis pg mysql2".split()),
    ".env": tuple("DATABASE_URL REDIS_URL AWS_ STRIPE_".split()),
    "docker-compose.yml": tuple("postgres redis mongo".split()),
}

DEPENDENCY_SECTIONS: tuple[tuple[str, str], ...] = (
    ("dependencies", "production"),
    ("devDependencies", "development"),
    ("peerDependencies", "peer"),
)

DEFAULT_ENDPOINT = APIEndpoint(
    method="GET",
    path="/",
    description="Default home endpoint",
    curl_example="curl http://localhost:3000",
)

_KEY_CONCEPTS = _lines(
    """
    AST-based parsing using Esprima for JavaScript
    Package.json analysis for dependencies
    Route extraction from Express/Fastify/Koa applications
    ES Module and CommonJS support
    Middleware architecture
    Environment configuration
    """
)

_SETUP = _lines(
    """
    Install Node.js (version specified in .nvmrc or package.json if available)
    Run `npm install` to install dependencies
    Create .env file based on .env.example
    Run `npm run dev` to start development server
    Run `npm test` to execute tests
    """
)

_DEPLOYMENT = _lines(
    """
    Node.js applications can be deployed using:
    - PM2 process manager for production
    - Docker containers
    - Serverless platforms (AWS Lambda, Vercel, Netlify)
    - Traditional VPS with Nginx reverse proxy
    """
)

_ROADMAP = _lines(
    """
    Add TypeScript type analysis
    Improve Express route detection
    Add GraphQL API documentation
    Support NestJS architecture analysis
    Add dependency vulnerability scanning
    """
)

_COMMON_ISSUES = _lines(
    """
    Missing .env variables - check .env.example
    Node version mismatch - use nvm or check package.json engines
    Port already in use - change PORT in .env
    Module not found - run npm install
    ESLint/prettier conflicts - check .eslintrc and .prettierrc
    """
)

_DEVELOPER_NOTES = _lines(
    """
    Use npm-check-updates to update dependencies: ncu -u
    Debug with Chrome DevTools: node --inspect server.js
    Generate dependency graph: npm install -g npm-license && npm-license
    """
)

_PARSER_DETAILS = _table(
    """
    JavaScript/TypeScript | AST parsing using Esprima, extracts routes, functions, classes
    package.json          | JSON parsing for dependencies, scripts, and metadata
    Configuration Files   | Analyzes next.config.js, nuxt.config.js, etc.
    """
)

_ARCHITECTURE = "\n".join(
    (
        "Client → Router → Middleware → Controller → Service → Model → Database",
        "│",
        "├── API Layer (Express/Fastify/Koa)",
        "├── Business Logic (Services)",
        "└── Data Access (Models/Repositories)",
    )
)

_DATA_FLOW = "\n".join(
    (
        "1. HTTP Request → 2. Server (Express/Fastify) → 3. Middleware → ",
        "4. Route Handler → 5. Service Layer → 6. Data Access → 7. Database → ",
        "8. Response Formatter → 9. HTTP Response",
    )
)


def _load_package(path: Path) -> dict[str, dict[str, str]]:
    """Read the dependency sections of a package.json; raises OSError or ValueError."""
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: package manifest is not a JSON object")
    sections: dict[str, dict[str, str]] = {}
    for key, _ in DEPENDENCY_SECTIONS:
        section = data.get(key)
        if section is None:
            sections[key] = {}
            continue
        if not isinstance(section, dict) or not all(
            isinstance(value, str) for value in section.values()
        ):
            raise ValueError(f"{path}: {key} must map package names to version strings")
        sections[key] = section
    return sections


def _read_or_empty(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


class NodeJSParser(BaseParser):
    """Parser for Node.js (JavaScript/TypeScript) projects."""

    def generate_overview(self, name: str, project_path: str | os.PathLike[str]) -> str:
        summary = self.read_readme(project_path)
        if not summary:
            summary = "Node.js application with modern JavaScript/TypeScript stack"
        return f"{name}: {summary}"

    def key_concepts(self) -> list[str]:
        return list(_KEY_CONCEPTS)

    def architecture(self) -> str:
        return _ARCHITECTURE

    def analyze_tech_stack(self, project_path: str | os.PathLike[str]) -> list[str]:
        root = Path(project_path)
        stack = ["Node.js"]
        stack.extend(tech for file, tech in FRAMEWORK_FILES.items() if (root / file).exists())
        try:
            package = _load_package(root / "package.json")
        except (OSError, ValueError):
            package = {}
        stack.extend(
            PACKAGE_FRAMEWORKS[dep]
            for dep in package.get("dependencies", {})
            if dep in PACKAGE_FRAMEWORKS
        )
        return self.remove_duplicates(stack)

    def analyze_folder_structure(self, project_path: str | os.PathLike[str]) -> dict[str, str]:
        structure = super().analyze_folder_structure(project_path)
        for folder, description in NODE_FOLDERS.items():
            structure.setdefault(folder, description)
        return structure

    def setup_instructions(self) -> list[str]:
        return list(_SETUP)

    def extract_api_endpoints(self, project_path: str | os.PathLike[str]) -> list[APIEndpoint]:
        root = Path(project_path)
        endpoints: list[APIEndpoint] = []
        for pattern in ROUTE_FILE_PATTERNS:
            for file in sorted(root.glob(pattern)):
                endpoints.extend(self.extract_express_routes(_read_or_empty(file)))
        if endpoints:
            return endpoints
        return [
            APIEndpoint(
                method=DEFAULT_ENDPOINT.method,
                path=DEFAULT_ENDPOINT.path,
                description=DEFAULT_ENDPOINT.description,
                curl_example=DEFAULT_ENDPOINT.curl_example,
            )
        ]

    def extract_express_routes(self, content: str) -> list[APIEndpoint]:
        """Find Express-style route registrations, one per line."""
        endpoints: list[APIEndpoint] = []
        for raw in content.split("\n"):
            line = raw.strip()
            method = next((verb for marker, verb in ROUTE_METHODS if marker in line), None)
            if method is None:
                continue
            route = self.extract_path_from_content(line)
            if not route:
                continue
            endpoints.append(
                APIEndpoint(
                    method=method,
                    path=route,
                    description=f"Express {method} endpoint",
                    curl_example=f"curl -X {method} http://localhost:3000{route}",
                )
            )
        return endpoints

    def parser_details(self) -> dict[str, str]:
        return dict(_PARSER_DETAILS)

    def data_flow(self) -> str:
        return _DATA_FLOW

    def detect_external_services(self, project_path: str | os.PathLike[str]) -> list[str]:
        return self.scan_external_services(project_path, SERVICE_CONFIG_FILES)

    def deployment_info(self, project_path: str | os.PathLike[str]) -> list[str]:
        root = Path(project_path)
        deployment = list(_DEPLOYMENT)
        if (root / "Dockerfile").exists():
            deployment.append("\nDetected Dockerfile - can be built with `docker build .`")
        if (root / "serverless.yml").exists():
            deployment.append("\nDetected serverless.yml - deploy with `serverless deploy`")
        return deployment

    def roadmap(self) -> list[str]:
        return list(_ROADMAP)

    def common_issues(self) -> list[str]:
        return list(_COMMON_ISSUES)

    def developer_notes(self, project_path: str | os.PathLike[str]) -> list[str]:
        notes = list(_DEVELOPER_NOTES)
        if (Path(project_path) / "tsconfig.json").exists():
            notes.append("TypeScript project - compile with tsc or use ts-node for development")
        return notes

    def parse_dependencies(self, project_path: str | os.PathLike[str], project: Project) -> None:
        """Add the package.json dependencies to project.

        Raises OSError when package.json cannot be read and ValueError when it
        is not a valid manifest.
        """
        package = _load_package(Path(project_path) / "package.json")
        for key, kind in DEPENDENCY_SECTIONS:
            for name, version in package[key].items():
                project.dependencies.setdefault(kind, []).append(
                    Dependency(name=name, version=version, type=kind)
                )

    def generate_sample_output(self, project_path: str | os.PathLike[str]) -> str:
        limit_parameter = dict(
            name="limit",
            type="integer",
            required=False,
            description="Number of items to return",
        )
        users_endpoint = dict(
            method="GET",
            path="/api/users",
            description="Get list of users",
            parameters=[limit_parameter],
        )
        sample = dict(
            project=dict(
                name="example-node-app",
                type="Node.js",
                description="Sample Node.js API application",
            ),
            endpoints=[users_endpoint],
            dependencies=dict(express="^4.17.1", mongoose="^5.12.0", typescript="^4.2.0"),
        )
        return json.dumps(sample, indent=2, sort_keys=True, ensure_ascii=False)