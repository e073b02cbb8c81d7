"""Exceptions raised by runlink.

Every failure belongs to exactly one ErrorKind. Context (offending path,
algorithm name, stream) is kept in attributes; messages are built from it.
"""

from typing import Optional

from runlink.codes import ErrorKind


class RunlinkError(Exception):
    """Base exception for all runlink failures.

    Raised only through a subclass; each branch below fixes its kind.
    A bare RunlinkError reports the configuration kind.
    """
    kind: ErrorKind = ErrorKind.CONFIGURATION


class ConfigurationError(RunlinkError):
    """Raised for invalid caller input, before any I/O happens."""
    kind = ErrorKind.CONFIGURATION


class UnknownHashAlgorithmError(ConfigurationError):
    """Raised when a requested hash algorithm is not supported."""
    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Unknown hash algorithm: {algorithm!r}")


class EmptyCommandError(ConfigurationError):
    """Raised when a command has no executable."""
    def __init__(self):
        super().__init__("Command arguments must name an executable")


class RunlinkIOError(RunlinkError):
    """Base for filesystem and process failures."""
    kind = ErrorKind.IO


class ArtifactReadError(RunlinkIOError):
    """Raised when an artifact cannot be opened or read."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read artifact {path}: {reason}")


class ArtifactTraversalError(RunlinkIOError):
    """Raised when a path cannot be traversed (missing root, unlistable dir, dangling link)."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot traverse {path}: {reason}")


class CommandSpawnError(RunlinkIOError):
    """Raised when the step command cannot be started."""
    def __init__(self, executable: str, reason: str, run_dir: Optional[str] = None):
        self.executable = executable
        self.reason = reason
        self.run_dir = run_dir
        where = f" in {run_dir}" if run_dir is not None else ""
        super().__init__(f"Cannot run {executable!r}{where}: {reason}")


class RunlinkEncodingError(RunlinkError):
    """Base for text decoding failures."""
    kind = ErrorKind.ENCODING


class InvalidPathError(RunlinkEncodingError):
    """Raised when a path is not usable as a virtual target path."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}")


class CapturedOutputEncodingError(RunlinkEncodingError):
    """Raised when captured command output is not valid UTF-8."""
    def __init__(self, stream: str, reason: str):
        self.stream = stream
        self.reason = reason
        super().__init__(f"Captured {stream} is not valid UTF-8: {reason}")
