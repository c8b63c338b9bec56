"""Shared fixtures: a throwaway root directory and the objects built on it."""

import pytest

from root_explorer.config import SandboxConfig, Settings
from root_explorer.explorer import Explorer
from root_explorer.listing import Lister
from root_explorer.transfer import Transferer


@pytest.fixture
def root(tmp_path):
    """Sandbox root with an ``outside`` sibling directory next to it."""
    base = tmp_path / "root"
    base.mkdir()
    (tmp_path / "outside").mkdir()
    (tmp_path / "outside" / "secret.txt").write_text("keep out")
    return base


@pytest.fixture
def config(root):
    return SandboxConfig(root=str(root.resolve()))


@pytest.fixture
def lister(config):
    return Lister(config)


@pytest.fixture
def transferer(config):
    return Transferer(config)


@pytest.fixture
def explorer(config):
    return Explorer(config)


@pytest.fixture
def tree(root):
    """Small tree used by listing and transfer tests.

    root/
        docs/
            Report.csv
            notes.txt
            archive/
                old_report.txt
        photos/
        readme.md
    """
    (root / "docs" / "archive").mkdir(parents=True)
    (root / "photos").mkdir()
    (root / "docs" / "Report.csv").write_text("a,b\n1,2\n")
    (root / "docs" / "notes.txt").write_text("notes")
    (root / "docs" / "archive" / "old_report.txt").write_text("old")
    (root / "readme.md").write_text("# readme")
    return root


@pytest.fixture
def client(root):
    pytest.importorskip("httpx")  # required by fastapi/starlette TestClient
    from fastapi.testclient import TestClient

    from root_explorer.main import create_app

    settings = Settings(root_dir=str(root), log_file="", case_insensitive=False)
    with TestClient(create_app(settings)) as c:
        yield c
