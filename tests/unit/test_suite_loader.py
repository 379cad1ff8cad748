"""Tests for allow-list and suite loading."""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from e2e_runner.suite_loader import load_allow_list, load_suites


class TestLoadAllowList:
    """Tests for load_allow_list function."""

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads test names in file order."""
        tests_file = tmp_path / "tests.yaml"
        tests_file.write_text(
            """
version: "1.0"
tests:
  - CreateDeleteUserTest
  - PinUnPinDeletePinTest   # uses queues
  - " LikeTopicTest "
"""
        )

        allow_list = load_allow_list(tests_file)

        assert allow_list.version == "1.0"
        assert allow_list.tests == [
            "CreateDeleteUserTest",
            "PinUnPinDeletePinTest",
            "LikeTopicTest",
        ]

    def test_missing_tests_key_is_empty(self, tmp_path: Path) -> None:
        """An allow-list without tests selects nothing."""
        tests_file = tmp_path / "tests.yaml"
        tests_file.write_text('version: "1.0"\n')

        assert load_allow_list(tests_file).tests == []

    def test_raises_for_missing_file(self, tmp_path: Path) -> None:
        """Raises FileNotFoundError when the file does not exist."""
        with pytest.raises(FileNotFoundError):
            load_allow_list(tmp_path / "missing.yaml")

    def test_raises_for_empty_file(self, tmp_path: Path) -> None:
        """Raises ValueError for an empty file."""
        tests_file = tmp_path / "tests.yaml"
        tests_file.write_text("")

        with pytest.raises(ValueError, match="empty"):
            load_allow_list(tests_file)

    def test_raises_for_missing_version(self, tmp_path: Path) -> None:
        """Raises ValidationError when the version is missing."""
        tests_file = tmp_path / "tests.yaml"
        tests_file.write_text("tests:\n  - PinTest\n")

        with pytest.raises(ValidationError):
            load_allow_list(tests_file)

    def test_raises_for_blank_name(self, tmp_path: Path) -> None:
        """Raises ValidationError for blank test names."""
        tests_file = tmp_path / "tests.yaml"
        tests_file.write_text('version: "1.0"\ntests:\n  - PinTest\n  - "  "\n')

        with pytest.raises(ValidationError, match="must not be empty"):
            load_allow_list(tests_file)


class TestLoadSuites:
    """Tests for load_suites function."""

    def test_imports_modules(self) -> None:
        """Imports every named module."""
        load_suites(["e2e_runner.testing.suites"])

        assert "e2e_runner.testing.suites" in sys.modules

    def test_raises_for_unknown_module(self) -> None:
        """Propagates import errors."""
        with pytest.raises(ModuleNotFoundError):
            load_suites(["no_such_suite_module"])
