import pytest

from codedoc.detection import detect_project_type


@pytest.mark.parametrize(
    ("marker", "expected"),
    [
        ("package.json", "Node.js"),
        ("requirements.txt", "Python"),
        ("setup.py", "Python"),
        ("composer.json", "PHP/Laravel"),
        ("go.mod", "Go"),
        ("pom.xml", "Java"),
        ("Gemfile", "Ruby/Rails"),
        ("Program.cs", ".NET"),
    ],
)
def test_marker_files(tmp_path, marker, expected):
    (tmp_path / marker).write_text("x")
    assert detect_project_type(tmp_path) == expected


def test_marker_directories(tmp_path):
    (tmp_path / "src" / "main" / "java").mkdir(parents=True)
    assert detect_project_type(tmp_path) == "Java"


def test_rails_models_directory(tmp_path):
    (tmp_path / "app" / "models").mkdir(parents=True)
    assert detect_project_type(tmp_path) == "Ruby/Rails"


def test_markers_take_precedence_over_extensions(tmp_path):
    (tmp_path / "go.mod").write_text("module x")
    for index in range(5):
        (tmp_path / f"script{index}.py").write_text("")
    assert detect_project_type(tmp_path) == "Go"


def test_fallback_counts_extensions(tmp_path):
    nested = tmp_path / "pkg"
    nested.mkdir()
    (nested / "a.py").write_text("")
    (nested / "b.py").write_text("")
    (tmp_path / "c.PY").write_text("")
    (tmp_path / "index.js").write_text("")
    assert detect_project_type(tmp_path) == "Python"


def test_fallback_groups_javascript_variants(tmp_path):
    for name in ("a.ts", "b.tsx", "c.jsx"):
        (tmp_path / name).write_text("")
    (tmp_path / "d.rb").write_text("")
    assert detect_project_type(tmp_path) == "Node.js"


def test_unrecognised_files_are_generic(tmp_path):
    (tmp_path / "notes.txt").write_text("")
    (tmp_path / "Makefile").write_text("")
    assert detect_project_type(tmp_path) == "Generic"


def test_empty_directory_is_generic(tmp_path):
    assert detect_project_type(tmp_path) == "Generic"


def test_missing_directory_is_generic(tmp_path):
    assert detect_project_type(tmp_path / "absent") == "Generic"