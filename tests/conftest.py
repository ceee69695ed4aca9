"""Pytest fixtures for repo-picker tests."""

import io

import pytest
import readchar
from rich.console import Console

from repo_picker.types import Item


@pytest.fixture
def make_items():
    """Factory turning names into Items with fake paths."""
    def _make(*names: str) -> list[Item]:
        return [Item(name=name, path=f"/src/{name}") for name in names]

    return _make


@pytest.fixture
def console():
    """Rich console that renders into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=80, height=24, force_terminal=False)


@pytest.fixture
def scripted_keys():
    """Build a key reader that returns the given keys in order.

    Running out of keys raises KeyboardInterrupt, which the picker treats as
    a cancel, so a bad script ends the test instead of hanging it.
    """
    def _script(*keys: str):
        queue = list(keys)

        def read_key() -> str:
            if not queue:
                raise KeyboardInterrupt
            return queue.pop(0)

        return read_key

    return _script


@pytest.fixture
def keys():
    """Common key strings as readchar reports them."""
    class Keys:
        UP = readchar.key.UP
        DOWN = readchar.key.DOWN
        ENTER = readchar.key.ENTER
        ESC = readchar.key.ESC
        BACKSPACE = readchar.key.BACKSPACE
        TAB = "\t"

    return Keys


@pytest.fixture
def repo_tree(tmp_path):
    """Create a directory tree with repositories marked by .git.

    Layout:
        code/alpha/.git
        code/beta/.git
        code/group/gamma/.git
        code/group/gamma/vendor/nested/.git
        code/notes/            (no marker)
        code/.hidden/secret/.git
        code/node_modules/pkg/.git
    """
    root = tmp_path / "code"
    for rel in [
        "alpha",
        "beta",
        "group/gamma",
        "group/gamma/vendor/nested",
        ".hidden/secret",
        "node_modules/pkg",
    ]:
        (root / rel / ".git").mkdir(parents=True)
    (root / "notes").mkdir()
    return root


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temporary directory."""
    home = tmp_path / "xdg"
    home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home / "repo-picker"
