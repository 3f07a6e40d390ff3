import zipfile

import pytest

from codedoc.fileutils import (
    UnsupportedArchiveError,
    cleanup_dir,
    create_dir,
    extract_archive,
)


def _make_zip(path, entries):
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


def test_create_dir_nested_and_idempotent(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    create_dir(target)
    create_dir(target)
    assert target.is_dir()


def test_extract_zip_files_and_directories(tmp_path):
    src = _make_zip(
        tmp_path / "code.zip",
        {"proj/": "", "proj/app.js": "console.log(1)", "proj/src/lib.js": "x"},
    )
    dest = tmp_path / "out"
    extract_archive(str(src), str(dest))
    assert (dest / "proj").is_dir()
    assert (dest / "proj" / "app.js").read_text() == "console.log(1)"
    assert (dest / "proj" / "src" / "lib.js").read_text() == "x"


def test_uppercase_extension_is_accepted(tmp_path):
    src = _make_zip(tmp_path / "CODE.ZIP", {"readme.txt": "hello"})
    dest = tmp_path / "out"
    extract_archive(src, dest)
    assert (dest / "readme.txt").read_text() == "hello"


@pytest.mark.parametrize("name, ext", [("code.tar", ".tar"), ("code.tar.gz", ".gz"), ("code", "")])
def test_unsupported_formats(tmp_path, name, ext):
    src = tmp_path / name
    src.write_bytes(b"data")
    with pytest.raises(UnsupportedArchiveError) as info:
        extract_archive(src, tmp_path / "out")
    assert info.value.extension == ext
    assert str(info.value) == f"unsupported archive format: {ext}"


def test_missing_archive(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_archive(tmp_path / "missing.zip", tmp_path / "out")


def test_corrupt_archive(tmp_path):
    src = tmp_path / "bad.zip"
    src.write_bytes(b"not a zip")
    with pytest.raises(zipfile.BadZipFile):
        extract_archive(src, tmp_path / "out")


def test_entry_outside_destination_is_rejected(tmp_path):
    src = _make_zip(tmp_path / "evil.zip", {"../escape.txt": "x"})
    dest = tmp_path / "out"
    with pytest.raises(ValueError):
        extract_archive(src, dest)
    assert not (tmp_path / "escape.txt").exists()


def test_cleanup_dir_removes_tree(tmp_path):
    target = tmp_path / "job"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "f.txt").write_text("x")
    cleanup_dir(target)
    assert not target.exists()


def test_cleanup_missing_path(tmp_path):
    target = tmp_path / "absent"
    cleanup_dir(target)
    assert not target.exists()