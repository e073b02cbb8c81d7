"""Run a step command and capture its byproducts.

Process I/O lives here; the Byproducts record itself is in runlink.kernel.byproducts.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

from runlink.errors import CapturedOutputEncodingError, CommandSpawnError, EmptyCommandError
from runlink.kernel.byproducts import Byproducts, format_return_value
from runlink.kernel.paths import is_virtual_target_path

logger = logging.getLogger(__name__)


def _resolve_argument(arg: str) -> str:
    """Resolve a path-like argument to its canonical form.

    The resolved form is only logged. The argument passed to the child
    is always the original string.
    """
    if is_virtual_target_path(arg):
        try:
            resolved = str(Path(arg).resolve(strict=True))
        except (OSError, RuntimeError):
            resolved = arg
        if resolved != arg:
            logger.debug(f"Argument {arg!r} resolves to {resolved}")
    return arg


def _emit(stream: TextIO, data: bytes) -> None:
    """Write captured bytes to one of our own standard streams."""
    if not data:
        return
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        stream.flush()
        buffer.write(data)
        buffer.flush()
    else:
        stream.write(data.decode("utf-8", errors="replace"))
        stream.flush()


def _decode(stream_name: str, data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CapturedOutputEncodingError(stream_name, str(e)) from e


def run_command(
    cmd_args: Sequence[Union[str, os.PathLike]],
    run_dir: Optional[Union[str, os.PathLike]] = None,
) -> Byproducts:
    """Execute a command and capture stdout, stderr and exit status.

    The child's output is fully captured, then written through to this
    process's stdout/stderr so a watching user still sees it.

    Args:
        cmd_args: Executable followed by its arguments
        run_dir: Working directory for the child (default: current directory)

    Returns:
        Byproducts of the run

    Raises:
        EmptyCommandError: If cmd_args is empty
        CommandSpawnError: If the process cannot be started
        CapturedOutputEncodingError: If stdout or stderr is not valid UTF-8
    """
    cmd_args = [os.fspath(arg) for arg in cmd_args]
    if not cmd_args:
        raise EmptyCommandError()

    executable = cmd_args[0]
    args = [_resolve_argument(arg) for arg in cmd_args[1:]]
    cwd = os.fspath(run_dir) if run_dir is not None else None

    logger.debug(f"Running {[executable, *args]} in {cwd or os.getcwd()}")
    try:
        completed = subprocess.run(
            [executable, *args],
            cwd=cwd,
            capture_output=True,
            check=False,
        )
    except (OSError, ValueError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise CommandSpawnError(executable, reason, run_dir=cwd) from e

    _emit(sys.stdout, completed.stdout)
    _emit(sys.stderr, completed.stderr)

    stdout = _decode("stdout", completed.stdout)
    stderr = _decode("stderr", completed.stderr)
    return_value = format_return_value(completed.returncode)
    logger.debug(f"{executable} finished with return value {return_value}")

    return Byproducts(stdout=stdout, stderr=stderr, return_value=return_value)
