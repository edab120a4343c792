"""Smoke tests for package import and version."""

import buttonlock


def test_import_package() -> None:
    assert isinstance(buttonlock, object)


def test_version() -> None:
    assert buttonlock.__version__ == "0.1.0"
