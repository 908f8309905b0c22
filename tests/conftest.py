"""Shared fixtures for linetally tests."""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Keep user/project config files and LINETALLY_* vars out of tests."""
    home = tmp_path_factory.mktemp("home")
    workdir = tmp_path_factory.mktemp("cwd")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workdir)
    for key in list(os.environ):
        if key.startswith("LINETALLY_"):
            monkeypatch.delenv(key)
    yield
    logging.getLogger("linetally").setLevel(logging.NOTSET)


@pytest.fixture
def make_tree(tmp_path):
    """Build a directory tree from a {relative_path: bytes} mapping."""

    def _make(files, root=None):
        base = root or tmp_path / "tree"
        base.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            target = base / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        return base

    return _make


@pytest.fixture
def sample_tree(make_tree):
    """a.txt has 3 newlines, b.txt is empty: total (3+1) + (0+1) = 5."""
    return make_tree({"a.txt": b"one\ntwo\nthree\n", "b.txt": b""})


@pytest.fixture
def nested_tree(make_tree):
    """Nested tree; expected total is 4 + 1 + 3 + 2 + 1 = 11."""
    return make_tree(
        {
            "top.txt": b"1\n2\n3\n",  # 3 newlines -> 4
            "empty.log": b"",  # 1
            "pkg/module.py": b"import os\n\nx = 1",  # 2 newlines -> 3
            "pkg/sub/deep.md": b"# title\n",  # 1 newline -> 2
            "pkg/sub/deeper/blob.bin": b"\x00\x01\x02",  # 0 newlines -> 1
        }
    )
