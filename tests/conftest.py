"""
pytest configuration and shared fixtures for butler tests.

Fixtures
--------
node_config : ButlerConfig
    Configuration with a single "node" template.

config_file : Path
    The same configuration written to a butler.toml file.

fake_clone : Callable
    Patches ``subprocess.run`` in :mod:`butler.git` so that a "clone"
    writes a given set of files into the destination.
"""

from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from butler.models import ButlerConfig, TemplateDescriptor


NODE_URL = "https://example.com/node-tpl.git"


@pytest.fixture
def node_config() -> ButlerConfig:
    """Configuration with one template named "node"."""
    return ButlerConfig(
        templates=[TemplateDescriptor(name="node", url=NODE_URL)],
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a butler.toml describing the "node" template."""
    path = tmp_path / "butler.toml"
    path.write_text(
        f'''
[[templates]]
name = "node"
url = "{NODE_URL}"

[[templates]]
name = "dotnet"
url = "https://example.com/dotnet-tpl.git"
''',
        encoding="utf-8",
    )
    return path


def write_tree(root: Path, files: dict[str, str | bytes]) -> None:
    """Create ``files`` (relative path -> content) below ``root``."""
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_bytes(content.encode("utf-8"))


@pytest.fixture
def fake_clone() -> Iterator[Callable[[dict[str, str | bytes]], MagicMock]]:
    """
    Simulate ``git clone`` by populating the destination directory.

    Usage::

        mock_run = fake_clone({"README.md": "Hello [[ .ProjectName ]]"})
    """
    patcher = None

    def install(files: dict[str, str | bytes]) -> MagicMock:
        nonlocal patcher

        def clone(cmd: list[str], **kwargs: object) -> MagicMock:
            destination = Path(cmd[-1])
            destination.mkdir(parents=True, exist_ok=True)
            write_tree(destination, files)
            return MagicMock(returncode=0)

        patcher = patch("butler.git.subprocess.run", side_effect=clone)
        return patcher.start()

    yield install

    if patcher is not None:
        patcher.stop()


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, str | bytes]], None]:
    """Return the :func:`write_tree` helper."""
    return write_tree
