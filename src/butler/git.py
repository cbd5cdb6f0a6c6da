"""
butler.git - Template Repository Cloning
========================================

Thin wrapper around ``git clone``. The clone is blocking and has no timeout;
git's progress output is streamed straight to standard output.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from butler.errors import CloneError


def build_clone_command(source_url: str, destination: Path) -> list[str]:
    """Return the git command line that clones ``source_url``."""
    return ["git", "clone", "--progress", source_url, str(destination)]


def fetch_template(source_url: str, destination: str | Path) -> Path:
    """
    Clone a template repository into ``destination``.

    The full history and working tree are cloned. The destination may not
    exist yet or may be an empty directory.

    Parameters
    ----------
    source_url : str
        Location of the template repository.

    destination : str | Path
        Directory to clone into.

    Returns
    -------
    Path
        The destination directory.

    Raises
    ------
    CloneError
        If the destination is not empty, git is not installed, or the clone
        itself fails (unreachable remote, authentication, transport).
    """
    destination = Path(destination)

    if destination.exists():
        if not destination.is_dir():
            raise CloneError(f"Destination '{destination}' exists and is not a directory")
        try:
            occupied = any(destination.iterdir())
        except OSError as e:
            raise CloneError(f"Cannot inspect destination '{destination}': {e}") from e
        if occupied:
            raise CloneError(f"Destination '{destination}' already exists and is not empty")

    try:
        # git writes progress to stderr; merge it into the inherited stdout
        subprocess.run(
            build_clone_command(source_url, destination),
            check=True,
            stderr=subprocess.STDOUT,
        )
    except FileNotFoundError as e:
        raise CloneError("git executable not found; is git installed?") from e
    except subprocess.CalledProcessError as e:
        raise CloneError(f"Failed to clone {source_url}: {e}") from e

    if not destination.is_dir():
        raise CloneError(f"Clone of {source_url} did not create '{destination}'")

    return destination
