"""CopyPath task: copy or symlink a path from the template checkout."""

import errno
import logging
import os
import shutil
from pathlib import Path

from supertree.cli.output import user_output
from supertree.core.config_store import CopyPathTask

logger = logging.getLogger(__name__)


def copy_path(task: CopyPathTask, source_dir: Path, target_dir: Path) -> None:
    """Bring task.source from source_dir into target_dir.

    Raises:
        OSError: If the source is missing (and not missing_okay), or the copy or
            symlink cannot be made
    """
    source_entry = source_dir / task.source
    target_entry = target_dir / task.source

    if not source_entry.exists():
        if task.missing_okay:
            user_output(f"Skipping {source_entry} as it is missing")
            return
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(source_entry))

    target_entry.parent.mkdir(parents=True, exist_ok=True)

    if task.symlink:
        user_output(f"Symlinking {source_entry} to {target_entry}")
        target_entry.symlink_to(source_entry.absolute())
    elif source_entry.is_dir():
        user_output(f"Copying {source_entry} to {target_entry}")
        copy_dir(source_entry, target_entry)
    else:
        user_output(f"Copying {source_entry} to {target_entry}")
        copy_file(source_entry, target_entry)


def copy_file(source: Path, target: Path) -> None:
    """Copy file contents and permission bits, replacing target if it is a file.

    Raises:
        IsADirectoryError: If target is an existing directory
    """
    shutil.copyfile(source, target)
    shutil.copymode(source, target)


def copy_dir(source: Path, target: Path) -> None:
    """Recursively copy the contents of source into target.

    Entries the current user cannot read, and entries that are neither regular files
    nor directories (sockets, FIFOs, dangling symlinks), are skipped with a warning
    instead of failing the whole copy.
    """
    target.mkdir(parents=True, exist_ok=True)

    for entry in sorted(source.iterdir()):
        target_entry = target / entry.relative_to(source)
        if entry.is_dir():
            if not os.access(entry, os.R_OK | os.X_OK):
                user_output(f"Warning: skipping unreadable directory {entry}")
                continue
            copy_dir(entry, target_entry)
        elif entry.is_file():
            if not os.access(entry, os.R_OK):
                user_output(f"Warning: skipping unreadable file {entry}")
                continue
            logger.debug("Copying %s to %s", entry, target_entry)
            try:
                copy_file(entry, target_entry)
            except PermissionError as e:
                user_output(f"Warning: skipping {entry}: {e.strerror}")
        else:
            user_output(f"Warning: skipping {entry} as it is not a regular file")
