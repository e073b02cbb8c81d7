"""Hash algorithm selection and streaming digest computation.

Key rules:
- Only algorithms in SUPPORTED_HASH_ALGORITHMS are accepted
- Unknown names fail before any file is touched
- No names means the canonical default (sha256)
- Each file is read once, whatever the number of algorithms
"""

import hashlib
from enum import Enum
from types import MappingProxyType
from typing import BinaryIO, Dict, Iterable, Mapping, Optional, Tuple

from runlink.errors import UnknownHashAlgorithmError


class HashAlgorithm(str, Enum):
    """Supported digest algorithms. Members sort by their string value."""
    SHA256 = "sha256"
    SHA512 = "sha512"


# Read-only registry: name -> algorithm
SUPPORTED_HASH_ALGORITHMS: Mapping[str, HashAlgorithm] = MappingProxyType(
    {algorithm.value: algorithm for algorithm in HashAlgorithm}
)

DEFAULT_HASH_ALGORITHM = HashAlgorithm.SHA256

HASH_CHUNK_SIZE = 64 * 1024

TargetDescription = Dict[HashAlgorithm, bytes]


def select_hash_algorithms(names: Optional[Iterable[str]] = None) -> Tuple[HashAlgorithm, ...]:
    """Validate requested algorithm names and return them as an ordered set.

    Args:
        names: Algorithm names (or HashAlgorithm members). None or empty
            selects DEFAULT_HASH_ALGORITHM.

    Returns:
        Sorted tuple of distinct HashAlgorithm values

    Raises:
        UnknownHashAlgorithmError: Naming the first unsupported entry
    """
    if names is None:
        return (DEFAULT_HASH_ALGORITHM,)
    if isinstance(names, str):
        names = [names]

    selected = set()
    for name in names:
        if not isinstance(name, str):
            raise UnknownHashAlgorithmError(repr(name))
        algorithm = SUPPORTED_HASH_ALGORITHMS.get(name)
        if algorithm is None:
            raise UnknownHashAlgorithmError(str(name))
        selected.add(algorithm)

    if not selected:
        return (DEFAULT_HASH_ALGORITHM,)
    return tuple(sorted(selected))


def calculate_hashes(
    reader: BinaryIO,
    hash_algorithms: Iterable[HashAlgorithm],
) -> Tuple[int, TargetDescription]:
    """Stream a binary reader through every algorithm in one pass.

    Returns:
        (number of bytes read, algorithm -> raw digest)
    """
    hashers = {algorithm: hashlib.new(algorithm.value) for algorithm in sorted(set(hash_algorithms))}
    length = 0
    while True:
        chunk = reader.read(HASH_CHUNK_SIZE)
        if not chunk:
            break
        length += len(chunk)
        for hasher in hashers.values():
            hasher.update(chunk)
    return length, {algorithm: hasher.digest() for algorithm, hasher in hashers.items()}
