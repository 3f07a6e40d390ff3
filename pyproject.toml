[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "codedoc"
version = "0.1.0"
description = "Web service that analyses an uploaded codebase archive and produces a Word documentation file"
requires-python = ">=3.10"
dependencies = [
    "flask",
]
keywords = ["documentation", "docx", "code analysis", "web service"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Documentation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
codedoc = "codedoc.app:main"

[tool.hatch.build.targets.wheel]
packages = ["codedoc"]

[tool.pytest.ini_options]
addopts = "-ra"
