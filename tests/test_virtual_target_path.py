"""Tests for VirtualTargetPath normalization."""

import pytest
from pydantic import BaseModel, ValidationError

from runlink.codes import ErrorKind
from runlink.errors import InvalidPathError
from runlink.kernel.paths import VirtualTargetPath, clean_path, is_virtual_target_path


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a/b", "a/b"),
        ("./a/b", "a/b"),
        ("a/b/", "a/b"),
        ("a//b", "a/b"),
        ("a/./b", "a/b"),
        ("a/x/../b", "a/b"),
        ("../a", "../a"),
        ("/abs/./path/", "/abs/path"),
        ("//abs", "/abs"),
        (".", "."),
        ("hello./world", "hello./world"),
    ],
)
def test_clean_path(raw, expected):
    """Lexical normalization collapses redundant segments."""
    assert clean_path(raw) == expected
    assert VirtualTargetPath(raw) == expected


def test_equivalent_spellings_are_equal():
    """Same location written two ways gives equal keys with equal hashes."""
    a = VirtualTargetPath("./src/main.py")
    b = VirtualTargetPath("src/main.py")
    assert a == b
    assert hash(a) == hash(b)
    assert {a: 1}[b] == 1


def test_orders_like_strings():
    paths = [VirtualTargetPath(p) for p in ["b", "a/z", "a"]]
    assert sorted(paths) == ["a", "a/z", "b"]


def test_construction_is_idempotent():
    path = VirtualTargetPath("./a")
    assert VirtualTargetPath(path) is path


@pytest.mark.parametrize("raw", ["", "a\x00b", "bad\udcffname"])
def test_invalid_paths_rejected(raw):
    """Empty, NUL-containing and non-text paths are encoding errors."""
    with pytest.raises(InvalidPathError) as exc_info:
        VirtualTargetPath(raw)
    assert exc_info.value.kind == ErrorKind.ENCODING
    assert not is_virtual_target_path(raw)


def test_non_string_rejected():
    with pytest.raises(InvalidPathError):
        VirtualTargetPath(42)  # type: ignore[arg-type]


def test_usable_in_pydantic_models():
    """Models normalize VirtualTargetPath fields on validation."""

    class Holder(BaseModel):
        path: VirtualTargetPath

    holder = Holder(path="./x/../y/")
    assert holder.path == "y"
    assert isinstance(holder.path, VirtualTargetPath)


def test_invalid_model_field_is_validation_error():
    """Invalid paths in a model surface as ValidationError, not InvalidPathError."""

    class Holder(BaseModel):
        path: VirtualTargetPath

    with pytest.raises(ValidationError, match="path is empty"):
        Holder(path="")
