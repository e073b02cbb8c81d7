"""Byte-stable JSON encoding for link metadata.

Signatures are computed over this encoding, so two traversals of an
unchanged tree must encode identically.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - Sorted keys
    - Stable separators (",", ":")
    - Non-ASCII kept as UTF-8, not escaped
    - Lists keep their order (callers sort them first where order is not meaningful)
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )


def canonical_bytes(obj: Any) -> bytes:
    """UTF-8 encoding of canonical_dumps(obj); the payload handed to signers."""
    return canonical_dumps(obj).encode("utf-8")
