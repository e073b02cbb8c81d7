"""Record artifacts: walk the filesystem and hash files found under root paths.

Traversal rules:
- Symbolic links are followed; each link target is visited at most once per root
- A link to one of its own ancestor directories is a cycle: logged and skipped
- Regular files are hashed under the path they were reached by
- Entries are keyed by VirtualTargetPath and returned sorted by key
- Special files (FIFOs, sockets, devices) are ignored
- Any other failure (missing root, unreadable file, dangling link) is fatal
"""

import errno
import logging
import os
import stat
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple, Union

from runlink.errors import ArtifactReadError, ArtifactTraversalError
from runlink.kernel.hash_algorithms import (
    HashAlgorithm,
    TargetDescription,
    calculate_hashes,
    select_hash_algorithms,
)
from runlink.kernel.paths import VirtualTargetPath

logger = logging.getLogger(__name__)

ArtifactMap = Dict[VirtualTargetPath, TargetDescription]

PathArg = Union[str, os.PathLike]


def _reason(error: OSError) -> str:
    return error.strerror or str(error)


def record_artifact(
    path: PathArg,
    hash_algorithms: Optional[Iterable[Union[str, HashAlgorithm]]] = None,
) -> Tuple[VirtualTargetPath, TargetDescription]:
    """Read and hash a single file.

    Args:
        path: Path of the file to hash
        hash_algorithms: Algorithms to apply (default: sha256)

    Returns:
        (normalized path, algorithm -> digest)

    Raises:
        UnknownHashAlgorithmError: If an algorithm is not supported
        InvalidPathError: If the path is not valid text
        ArtifactReadError: If the file cannot be opened or read
    """
    algorithms = select_hash_algorithms(hash_algorithms)
    path = os.fspath(path)
    virtual_path = VirtualTargetPath(path)
    try:
        with open(path, "rb") as f:
            length, hashes = calculate_hashes(f, algorithms)
    except OSError as e:
        raise ArtifactReadError(path, _reason(e)) from e
    logger.debug(f"Recorded {virtual_path} ({length} bytes)")
    return virtual_path, hashes


def _list_children(path: str) -> List[str]:
    try:
        names = os.listdir(path)
    except OSError as e:
        raise ArtifactTraversalError(path, _reason(e)) from e
    return [os.path.join(path, name) for name in sorted(names)]


def _record_root(
    root: str,
    hash_algorithms: Sequence[HashAlgorithm],
    artifacts: ArtifactMap,
) -> None:
    """Walk one root with an explicit stack, adding every file found to artifacts."""
    # Per-root state: symlink targets already followed
    visited_targets: Set[str] = set()
    # Stack frames carry the real paths of the directories above the entry
    stack: List[Tuple[str, FrozenSet[str]]] = [(root, frozenset())]

    while stack:
        path, ancestors = stack.pop()
        VirtualTargetPath(path)  # fails fast on paths that are not valid text

        try:
            mode = os.lstat(path).st_mode
        except OSError as e:
            raise ArtifactTraversalError(path, _reason(e)) from e

        if stat.S_ISLNK(mode):
            target = os.path.realpath(path)
            if target in visited_targets:
                logger.debug(f"Skipping {path}: target {target} already visited")
                continue
            visited_targets.add(target)

            try:
                target_mode = os.stat(path).st_mode
            except OSError as e:
                if e.errno == errno.ELOOP:
                    logger.warning(f"Skipping symbolic link cycle at {path}")
                    continue
                raise ArtifactTraversalError(path, f"cannot follow symbolic link: {_reason(e)}") from e

            if stat.S_ISREG(target_mode):
                virtual_path, hashes = record_artifact(path, hash_algorithms)
                artifacts[virtual_path] = hashes
            elif stat.S_ISDIR(target_mode):
                if target in ancestors:
                    logger.warning(
                        f"Skipping symbolic link cycle at {path}: {target} is an ancestor"
                    )
                    continue
                children = _list_children(path)
                stack.extend((child, ancestors | {target}) for child in reversed(children))

        elif stat.S_ISREG(mode):
            virtual_path, hashes = record_artifact(path, hash_algorithms)
            artifacts[virtual_path] = hashes

        elif stat.S_ISDIR(mode):
            children = _list_children(path)
            real_dir = os.path.realpath(path)
            stack.extend((child, ancestors | {real_dir}) for child in reversed(children))

        else:
            logger.debug(f"Ignoring {path}: not a regular file or directory")


def record_artifacts(
    paths: Iterable[PathArg],
    hash_algorithms: Optional[Iterable[Union[str, HashAlgorithm]]] = None,
) -> ArtifactMap:
    """Traverse paths, hash every file found, return a map sorted by path.

    Args:
        paths: Root files or directories. Relative roots yield relative keys.
        hash_algorithms: Algorithm names (default: sha256). Validated before
            any filesystem access.

    Returns:
        VirtualTargetPath -> TargetDescription, in ascending path order

    Raises:
        UnknownHashAlgorithmError: If an algorithm is not supported
        InvalidPathError: If a path encountered is not valid text
        ArtifactTraversalError: If a root is missing or a directory cannot be walked
        ArtifactReadError: If a file cannot be read
    """
    algorithms = select_hash_algorithms(hash_algorithms)
    if isinstance(paths, (str, os.PathLike)):
        paths = [paths]
    roots = [os.fspath(path) for path in paths]

    artifacts: ArtifactMap = {}
    for root in roots:
        _record_root(root, algorithms, artifacts)

    return {path: artifacts[path] for path in sorted(artifacts)}
