"""
Smoke tests for package structure and availability.

Scope
-----
These tests strictly verify that the package is installed correctly in the
environment and that top-level modules are importable.
"""

from __future__ import annotations

import importlib

from prophistory import __version__


def test_package_importable() -> None:
    """Ensure the top-level package can be imported."""
    mod = importlib.import_module("prophistory")
    assert mod is not None


def test_version_is_set() -> None:
    """Ensure the package exposes a valid version string."""
    assert isinstance(__version__, str)
    assert len(__version__) > 0


def test_engine_surface() -> None:
    """The engine package re-exports the timeline entry points."""
    engine = importlib.import_module("prophistory.engine")
    for name in ("build_timeline", "parse_document", "traverse", "format_node"):
        assert hasattr(engine, name), f"prophistory.engine must expose {name!r}"


def test_cli_module_exposes_app() -> None:
    """
    Ensure the CLI module exposes the Typer 'app' object.

    The presence of 'app' is required for the entry point defined in
    pyproject.toml (`prophistory.cli:app`).
    """
    cli = importlib.import_module("prophistory.cli")
    assert hasattr(cli, "app"), "prophistory.cli must expose an 'app' Typer object."
