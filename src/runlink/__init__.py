"""runlink: record materials, byproducts and products of a supply-chain step."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("runlink")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from runlink.codes import ErrorKind
from runlink.errors import (
    RunlinkError,
    ConfigurationError,
    UnknownHashAlgorithmError,
    EmptyCommandError,
    RunlinkIOError,
    ArtifactReadError,
    ArtifactTraversalError,
    CommandSpawnError,
    RunlinkEncodingError,
    InvalidPathError,
    CapturedOutputEncodingError,
)
from runlink.kernel.hash_algorithms import HashAlgorithm, select_hash_algorithms
from runlink.kernel.paths import VirtualTargetPath
from runlink._internal.io.artifacts import record_artifact, record_artifacts
from runlink._internal.io.command import run_command
from runlink.kernel.byproducts import Byproducts
from runlink.kernel.link import LinkMetadata, Metablock, Signature, Signer
from runlink.runlib import in_toto_run

__all__ = [
    "__version__",
    "in_toto_run",
    "record_artifact",
    "record_artifacts",
    "run_command",
    "select_hash_algorithms",
    "HashAlgorithm",
    "VirtualTargetPath",
    "Byproducts",
    "LinkMetadata",
    "Metablock",
    "Signature",
    "Signer",
    "ErrorKind",
    "RunlinkError",
    "ConfigurationError",
    "UnknownHashAlgorithmError",
    "EmptyCommandError",
    "RunlinkIOError",
    "ArtifactReadError",
    "ArtifactTraversalError",
    "CommandSpawnError",
    "RunlinkEncodingError",
    "InvalidPathError",
    "CapturedOutputEncodingError",
]
