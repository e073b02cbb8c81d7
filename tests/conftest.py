"""Pytest configuration and shared fixtures.

No sys.path hacks - tests import from the installed runlink package.
"""

import os
import pytest
from pathlib import Path


def _symlinks_supported() -> bool:
    return hasattr(os, "symlink") and os.name != "nt"


@pytest.fixture
def runlib_tree(tmp_path, monkeypatch):
    """Build a small artifact tree and chdir next to it.

    Layout (relative to the working directory):

        LICENSE
        tree/.hidden/foo
        tree/.hidden/.bar
        tree/hello./world
        tree/hello./symbolic_to_nonparent_folder -> ../.hidden
        tree/hello./symbolic_to_parent_folder -> ..        (cycle)
        tree/symbolic_to_file -> hello./world
        tree/symbolic_to_license_file -> ../LICENSE
    """
    if not _symlinks_supported():
        pytest.skip("symbolic links not available")

    (tmp_path / "LICENSE").write_bytes(b"license text\n")

    tree = tmp_path / "tree"
    hidden = tree / ".hidden"
    hello = tree / "hello."
    hidden.mkdir(parents=True)
    hello.mkdir()

    (hidden / "foo").write_bytes(b"bar\n")
    (hidden / ".bar").write_bytes(b"foo\n")
    (hello / "world").write_bytes(b"hello world\n")

    os.symlink("../.hidden", hello / "symbolic_to_nonparent_folder")
    os.symlink("..", hello / "symbolic_to_parent_folder")
    os.symlink("hello./world", tree / "symbolic_to_file")
    os.symlink("../LICENSE", tree / "symbolic_to_license_file")

    monkeypatch.chdir(tmp_path)
    return Path("tree")
