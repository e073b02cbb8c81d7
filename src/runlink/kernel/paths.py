"""Virtual target paths: normalized artifact identifiers."""

import posixpath
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from runlink.errors import InvalidPathError


def clean_path(path: str) -> str:
    """Lexically normalize a slash-separated path.

    Removes "." segments, collapses "name/.." pairs and repeated slashes,
    drops trailing slashes. Leading ".." segments of relative paths are kept.
    """
    cleaned = posixpath.normpath(path)
    # normpath preserves exactly two leading slashes (POSIX implementation-defined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


class VirtualTargetPath(str):
    """Normalized path used as a stable, comparable artifact key.

    Two spellings of the same location (e.g. "./a/b/" and "a/b") produce
    equal instances. Instances order and hash like plain strings.
    """

    __slots__ = ()

    def __new__(cls, path: str) -> "VirtualTargetPath":
        if isinstance(path, VirtualTargetPath):
            return path
        if not isinstance(path, str):
            raise InvalidPathError(repr(path), f"expected str, got {type(path).__name__}")
        if not path:
            raise InvalidPathError(path, "path is empty")
        if "\x00" in path:
            raise InvalidPathError(path, "path contains NUL")
        try:
            path.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidPathError(path, "non-UTF-8 path") from e
        return super().__new__(cls, clean_path(path))

    def __repr__(self) -> str:
        return f"VirtualTargetPath({str(self)!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Lets models use VirtualTargetPath as a field or dict key type
        return core_schema.no_info_after_validator_function(_validate_field, core_schema.str_schema())


def _validate_field(value: str) -> VirtualTargetPath:
    # pydantic only reports ValueError as a ValidationError
    try:
        return VirtualTargetPath(value)
    except InvalidPathError as e:
        raise ValueError(str(e)) from e


def is_virtual_target_path(path: str) -> bool:
    """Return True if the string is accepted as a virtual target path."""
    try:
        VirtualTargetPath(path)
    except InvalidPathError:
        return False
    return True
