"""Hash subcommand: run hashdeep to produce a compatible log."""

import logging
import shutil
import subprocess
from pathlib import Path

from ..log.file import OutputFileExists
from ..settings import DEFAULT_HASH_PROGRAM

logger = logging.getLogger(__name__)


class HashdeepFailed(RuntimeError):
    """hashdeep could not be started or exited with an error."""


def get_hashdeep_arguments(target_directory: str | Path, program: str = DEFAULT_HASH_PROGRAM) -> list[str]:
    """Build the hashdeep command line: relative paths, recursive, regular files only."""
    return [program, '-l', '-r', '-o', 'f', str(target_directory)]


def do_hash(
        target_directory: str | Path,
        output_path_base: str | Path,
        program: str = DEFAULT_HASH_PROGRAM
) -> Path:
    """Hash a directory tree with hashdeep.

    Equivalent to:
        hashdeep -l -r -o f TARGET > OUTPUT_PATH_BASE 2> OUTPUT_PATH_BASE.errors

    Args:
        target_directory: Directory to hash
        output_path_base: Log file to create; hashdeep's stderr goes to the same path plus ".errors"
        program: hashdeep executable

    Returns:
        Path of the written log

    Raises:
        OutputFileExists: The log or its .errors file already exists
        NotADirectoryError: target_directory is not an existing directory
        HashdeepFailed: hashdeep was not found or returned a non-zero status
    """
    log_path = Path(output_path_base)
    errors_path = Path(str(output_path_base) + '.errors')

    for path in (log_path, errors_path):
        if path.exists():
            raise OutputFileExists(path)

    target = Path(target_directory)
    if not target.is_dir():
        raise NotADirectoryError(f"Target is not a directory: {target}")

    if shutil.which(program) is None:
        raise HashdeepFailed(f"{program} was not found; install hashdeep or set hash.program in the settings file")

    arguments = get_hashdeep_arguments(target_directory, program)
    logger.info(f"Running {' '.join(arguments)} > {log_path} 2> {errors_path}")

    with open(log_path, 'x') as stdout, open(errors_path, 'x') as stderr:
        completed = subprocess.run(arguments, stdout=stdout, stderr=stderr, stdin=subprocess.DEVNULL)

    if completed.returncode != 0:
        raise HashdeepFailed(
            f"{program} exited with status {completed.returncode}; see {errors_path} for details")

    logger.info(f"Completed hashing {target} into {log_path}")
    return log_path
