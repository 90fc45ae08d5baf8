"""
Unit tests for ProjectStore (projectos/project/store.py).

Tests listing, reading, creating and identifier validation against a
temporary project directory.
"""

import os
from datetime import date
from pathlib import Path

import pytest

from projectos.project import store as store_module
from projectos.project.store import ProjectStore, get_project_store
from projectos.project.types import FailureKind, ProjectDocument

ROOF = "---\ntitle: Roof Project\nstatus: not_started\n---\n# Desc"


def write(root: Path, name: str, content, binary: bool = False) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / name
    if binary:
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def test_root_directory_created_on_first_use(store, projects_dir):
    assert not projects_dir.exists()

    assert store.list_projects() == []

    assert projects_dir.is_dir()


def test_ensure_root_is_idempotent(store, projects_dir):
    store.ensure_root()
    store.ensure_root()
    assert projects_dir.is_dir()


def test_empty_store_lists_nothing(store):
    assert store.list_projects() == []


def test_create_then_read_full(store, projects_dir):
    result = store.create_project("p1.md", ROOF)

    assert result.success is True
    assert result.identifier == "p1.md"
    assert (projects_dir / "p1.md").read_text(encoding="utf-8") == ROOF

    document = store.read_project("p1.md")
    assert isinstance(document, ProjectDocument)
    assert document.identifier == "p1.md"
    assert document.metadata == {"title": "Roof Project", "status": "not_started"}
    assert document.narrative == "# Desc"


def test_create_writes_text_verbatim(store, projects_dir):
    text = "no header at all\r\nwindows line\n"

    assert store.create_project("raw.md", text).success

    assert (projects_dir / "raw.md").read_bytes() == text.encode("utf-8")
    document = store.read_project("raw.md")
    assert document.metadata == {}
    assert document.narrative == text


def test_list_returns_identifier_and_metadata(store, projects_dir):
    write(projects_dir, "roof.md", ROOF)
    write(projects_dir, "solar.md", "---\ntitle: Solar\nstatus: in_progress\nstartDate: 2026-02-01\ncustom: 7\n---\nbody")

    summaries = {s.identifier: s for s in store.list_projects()}

    assert set(summaries) == {"roof.md", "solar.md"}
    solar = summaries["solar.md"]
    assert solar.metadata == {"title": "Solar", "status": "in_progress", "startDate": date(2026, 2, 1), "custom": 7}
    assert solar.model_dump() == {
        "identifier": "solar.md",
        "title": "Solar",
        "status": "in_progress",
        "startDate": date(2026, 2, 1),
        "custom": 7,
    }


def test_list_ignores_other_suffixes_and_directories(store, projects_dir):
    write(projects_dir, "roof.md", ROOF)
    write(projects_dir, "notes.txt", ROOF)
    (projects_dir / "archive.md").mkdir()

    assert [s.identifier for s in store.list_projects()] == ["roof.md"]


def test_list_includes_documents_without_front_matter(store, projects_dir):
    write(projects_dir, "plain.md", "# Only a body")

    summaries = store.list_projects()

    assert len(summaries) == 1
    assert summaries[0].identifier == "plain.md"
    assert summaries[0].metadata == {}


def test_list_omits_only_the_corrupted_document(store, projects_dir):
    for i in range(4):
        write(projects_dir, f"p{i}.md", f"---\ntitle: Project {i}\n---\nbody")
    write(projects_dir, "broken.md", "---\ntitle: [unclosed\n---\nbody")

    summaries = store.list_projects()

    assert len(summaries) == 4
    assert "broken.md" not in {s.identifier for s in summaries}


def test_list_omits_undecodable_bytes(store, projects_dir):
    write(projects_dir, "ok.md", ROOF)
    write(projects_dir, "binary.md", b"\xff\xfe\x00garbage", binary=True)

    assert [s.identifier for s in store.list_projects()] == ["ok.md"]


def test_list_omits_document_with_impossible_date(store, projects_dir):
    write(projects_dir, "good.md", ROOF)
    write(projects_dir, "bad.md", "---\ntitle: Bad\nendDate: 2026-13-01\n---\nbody")

    assert [s.identifier for s in store.list_projects()] == ["good.md"]


def test_read_impossible_date_keeps_text_as_narrative(store, projects_dir):
    text = "---\ntitle: Bad\nstartDate: 2026-02-30\n---\nbody"
    write(projects_dir, "bad.md", text)

    document = store.read_project("bad.md")

    assert document.metadata == {}
    assert document.narrative == text


def test_list_stringifies_non_string_keys(store, projects_dir):
    write(projects_dir, "keys.md", "---\n2026: budget year\n2026-01-01: kickoff\ntitle: Keys\n---\n")

    (summary,) = store.list_projects()

    assert summary.metadata == {"2026": "budget year", "2026-01-01": "kickoff", "title": "Keys"}
    assert store.read_project("keys.md").metadata == {2026: "budget year", date(2026, 1, 1): "kickoff", "title": "Keys"}


def test_list_survives_unreadable_file(store, projects_dir, monkeypatch):
    write(projects_dir, "ok.md", ROOF)
    write(projects_dir, "locked.md", ROOF)
    real_open = open

    def guarded_open(path, *args, **kwargs):
        if str(path).endswith("locked.md"):
            raise PermissionError(13, "Permission denied")
        return real_open(path, *args, **kwargs)

    monkeypatch.setattr("builtins.open", guarded_open)

    assert [s.identifier for s in store.list_projects()] == ["ok.md"]


def test_read_missing_returns_none(store):
    assert store.read_project("missing.md") is None


def test_read_undecodable_returns_none(store, projects_dir):
    write(projects_dir, "binary.md", b"\xff\xfe\x00garbage", binary=True)

    assert store.read_project("binary.md") is None


def test_read_tolerates_malformed_header(store, projects_dir):
    text = "---\ntitle: [unclosed\n---\nbody"
    write(projects_dir, "broken.md", text)

    document = store.read_project("broken.md")

    assert document.metadata == {}
    assert document.narrative == text


@pytest.mark.parametrize("identifier", ["../escape.md", "/etc/passwd.md", "sub/dir.md", "..\\escape.md", "", "   "])
def test_read_rejects_invalid_identifier(store, identifier):
    assert store.read_project(identifier) is None


def test_create_rejects_path_traversal(store, tmp_path, projects_dir):
    result = store.create_project("../escape.md", "x")

    assert result.success is False
    assert result.error_kind == FailureKind.VALIDATION
    assert not (tmp_path / "escape.md").exists()
    assert not projects_dir.exists()


@pytest.mark.parametrize(
    "identifier,reason",
    [
        ("", "empty"),
        ("   ", "empty"),
        ("a/b.md", "separators"),
        ("a\\b.md", "separators"),
        ("..", "not a file name"),
        ("nul\x00.md", "NUL"),
        ("notes.txt", "must end with '.md'"),
        (".md", "must end with '.md'"),
        ("roof", "must end with '.md'"),
        (None, "empty"),
    ],
)
def test_validate_identifier_rejections(store, identifier, reason):
    error = store.validate_identifier(identifier)

    assert error is not None
    assert reason in error


@pytest.mark.parametrize("identifier", ["roof.md", "solar-project.md", "光伏项目.md", "2026 plan.md", "..hidden.md"])
def test_validate_identifier_accepts_plain_names(store, identifier):
    assert store.validate_identifier(identifier) is None


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_validate_identifier_rejects_symlink_escaping_root(store, projects_dir, tmp_path):
    outside = tmp_path / "outside.md"
    outside.write_text(ROOF, encoding="utf-8")
    projects_dir.mkdir()
    (projects_dir / "link.md").symlink_to(outside)

    assert "outside" in store.validate_identifier("link.md")
    assert store.create_project("link.md", "x", overwrite=True).error_kind == FailureKind.VALIDATION
    assert outside.read_text(encoding="utf-8") == ROOF


def test_create_existing_identifier_is_rejected_without_overwrite(store, projects_dir):
    assert store.create_project("p1.md", ROOF).success

    result = store.create_project("p1.md", "---\ntitle: Replacement\n---\n")

    assert result.success is False
    assert result.error_kind == FailureKind.ALREADY_EXISTS
    assert (projects_dir / "p1.md").read_text(encoding="utf-8") == ROOF


def test_create_with_overwrite_replaces_document(store):
    store.create_project("p1.md", ROOF)

    result = store.create_project("p1.md", "---\ntitle: Replacement\n---\n", overwrite=True)

    assert result.success is True
    assert store.read_project("p1.md").metadata == {"title": "Replacement"}


def test_create_rejects_oversized_document(projects_dir):
    small_store = ProjectStore(projects_dir, max_document_bytes=16)

    result = small_store.create_project("big.md", "x" * 17)

    assert result.error_kind == FailureKind.VALIDATION
    assert "limit" in result.error
    assert not (projects_dir / "big.md").exists()


def test_create_reports_io_failure(store, monkeypatch):
    def failing_mkdir(self, *args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "mkdir", failing_mkdir)

    result = store.create_project("p1.md", ROOF)

    assert result.success is False
    assert result.error_kind == FailureKind.IO
    assert "No space left on device" in result.error


def test_exists(store):
    assert store.exists("p1.md") is False
    store.create_project("p1.md", ROOF)
    assert store.exists("p1.md") is True
    assert store.exists("../p1.md") is False


def test_custom_suffix(projects_dir):
    txt_store = ProjectStore(projects_dir, suffix=".txt")
    write(projects_dir, "a.txt", ROOF)
    write(projects_dir, "b.md", ROOF)

    assert [s.identifier for s in txt_store.list_projects()] == ["a.txt"]
    assert txt_store.validate_identifier("b.md") is not None


def test_empty_suffix_rejected(projects_dir):
    with pytest.raises(ValueError, match="suffix"):
        ProjectStore(projects_dir, suffix="")


def test_get_project_store_is_a_singleton(tmp_path):
    first = get_project_store()

    assert first is get_project_store()
    assert first.root == tmp_path / "default-projects"
    assert store_module._project_store is first
