"""Create link metadata for a supply-chain step.

in_toto_run records materials, runs the step command, records products,
and wraps the resulting link in a Metablock, signed if a key is given.
The order is fixed: materials are never recorded after the command starts,
products never before it finishes.
"""

import logging
import os
from typing import Iterable, Optional, Sequence, Union

from runlink._internal.io.artifacts import PathArg, record_artifacts
from runlink._internal.io.command import run_command
from runlink.kernel.hash_algorithms import HashAlgorithm, select_hash_algorithms
from runlink.kernel.link import LinkMetadata, Metablock, Signer
from runlink.kernel.paths import VirtualTargetPath

logger = logging.getLogger(__name__)


def _environment(run_dir: Optional[PathArg]) -> dict:
    workdir = os.path.abspath(os.fspath(run_dir)) if run_dir is not None else os.getcwd()
    return {"workdir": str(VirtualTargetPath(workdir))}


def in_toto_run(
    name: str,
    run_dir: Optional[PathArg],
    material_paths: Iterable[PathArg],
    product_paths: Iterable[PathArg],
    cmd_args: Sequence[Union[str, os.PathLike]],
    key: Optional[Signer] = None,
    hash_algorithms: Optional[Iterable[Union[str, HashAlgorithm]]] = None,
    record_environment: bool = False,
) -> Metablock:
    """Run a step command and return its link metadata.

    Args:
        name: Step name recorded in the link
        run_dir: Working directory for the command (default: current directory)
        material_paths: Paths recorded before the command runs
        product_paths: Paths recorded after the command finishes
        cmd_args: Executable followed by its arguments
        key: Signer for the link. Without one the Metablock is unsigned.
        hash_algorithms: Algorithm names shared by materials and products
            (default: sha256)
        record_environment: Record the command's working directory in the link

    Returns:
        Metablock wrapping the LinkMetadata

    Raises:
        RunlinkError: From any step; later steps are not attempted
    """
    # Validate once, before any filesystem access or process spawn
    algorithms = select_hash_algorithms(hash_algorithms)
    cmd_args = [os.fspath(arg) for arg in cmd_args]

    logger.info(f"Recording materials for step {name!r}")
    materials = record_artifacts(material_paths, algorithms)

    logger.info(f"Running step {name!r}: {cmd_args}")
    byproducts = run_command(cmd_args, run_dir)

    logger.info(f"Recording products for step {name!r}")
    products = record_artifacts(product_paths, algorithms)

    link = LinkMetadata(
        name=name,
        command=tuple(cmd_args),
        materials=materials,
        products=products,
        byproducts=byproducts,
        environment=_environment(run_dir) if record_environment else {},
    )

    if key is None:
        return Metablock.unsigned(link)
    logger.info(f"Signing link {name!r} with key {key.keyid}")
    return Metablock.signed_by(link, key)
