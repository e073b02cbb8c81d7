"""Packaging regression tests.

Tests that verify the package source structure and version metadata.
"""

from pathlib import Path


def test_source_layout():
    """runlink lives under src/ with kernel and _internal subpackages."""
    here = Path(__file__).resolve().parent
    repo_root = here.parent
    src_runlink = repo_root / "src" / "runlink"

    assert src_runlink.exists(), "runlink package should exist in src/"
    assert (src_runlink / "kernel").exists(), "runlink.kernel should exist in src/"
    assert (src_runlink / "_internal").exists(), "runlink._internal should exist"
    assert (src_runlink / "_internal" / "io").exists(), "filesystem and process I/O live in runlink._internal.io"
    assert (repo_root / "pyproject.toml").exists()


def test_import_boundary():
    """Package and namespace subpackages import; version is set."""
    import runlink
    import runlink.kernel  # noqa: F401
    import runlink._internal  # noqa: F401

    # In dev mode it's "dev", in installed mode it's "1.0.0"
    assert runlink.__version__ in ("1.0.0", "dev")
