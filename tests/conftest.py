"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- clean_env: removes MANIFY_* variables so tests see default configuration
- write_plugin: builds a plugin directory with a manifest and command file
- plugin_root: a project root with one documented plugin
"""

import json
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

GREET_COMMAND_SOURCE = '''
class Greet_Command:
    """Greets people."""

    def hello(self, args, assoc_args):
        """Say hi.

        ## OPTIONS

        [--name=<name>]
        : Who to greet.

        ## EXAMPLES

            # Greet Ada.
            $ wp greet hello --name=Ada
            Hello, Ada!

        @subcommand hello
        """

    def run(self, args, assoc_args):
        """Run the greeter."""

    def undocumented(self, args, assoc_args):
        pass

    def _helper(self):
        """Private helpers are never documented."""
'''


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove MANIFY_* environment variables for every test."""
    for name in (
        "MANIFY_DESTINATION",
        "MANIFY_SOURCE",
        "MANIFY_MANIFEST_NAME",
        "MANIFY_HEADING_PREFIX",
        "MANIFY_SCAN_PLUGINS",
        "MANIFY_LOG_LEVEL",
        "MANIFY_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_plugin() -> Callable[..., Path]:
    """Factory writing ``<root>/<name>/composer.json`` plus source files."""

    def _write(
        root: Path,
        name: str,
        manifest: dict[str, Any] | str,
        files: dict[str, str] | None = None,
    ) -> Path:
        plugin_dir = root / name if name else root
        plugin_dir.mkdir(parents=True, exist_ok=True)
        text = manifest if isinstance(manifest, str) else json.dumps(manifest)
        (plugin_dir / "composer.json").write_text(text, encoding="utf-8")
        for rel_path, source in (files or {}).items():
            file_path = plugin_dir / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(textwrap.dedent(source), encoding="utf-8")
        return plugin_dir

    return _write


@pytest.fixture
def plugin_root(tmp_path: Path, write_plugin: Callable[..., Path]) -> Path:
    """Project root containing a single ``greeter`` plugin."""
    root = tmp_path / "plugins"
    write_plugin(
        root,
        "greeter",
        {
            "name": "acme/greeter",
            "extra": {
                "wp-cli-commands": {
                    "greet": {"class": "Greet_Command", "file": "src/greet.py"},
                }
            },
        },
        {"src/greet.py": GREET_COMMAND_SOURCE},
    )
    return root
