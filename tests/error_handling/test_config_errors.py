"""
Error handling tests for configuration loading and validation.

Tests that the configuration system reports invalid files and values.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from procsnap.config import Config
from procsnap.core import ProcSnap
from procsnap.errors import CollaboratorFailure, SourceUnavailable
from procsnap.reader import PseudoFileReader
from procsnap.sensors import configure_sources


@pytest.mark.integration
class TestConfigErrors(unittest.TestCase):
    """Test configuration error handling."""

    def setUp(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test environment."""
        for file_path in self.temp_dir.glob("*"):
            if file_path.is_file():
                file_path.unlink()
        self.temp_dir.rmdir()

    def create_test_file(self, content: str, filename: str = "test.yaml"):
        """Create a test config file."""
        file_path = self.temp_dir / filename
        file_path.write_text(content)
        return file_path

    def test_invalid_yaml_syntax(self):
        """Test handling of invalid YAML syntax."""
        path = self.create_test_file("show:\n  cpu: false\n invalid: yaml: here\n[unclosed")

        with self.assertRaises(yaml.YAMLError):
            Config.from_file(path)

    def test_missing_file_in_load_uses_defaults(self):
        """An explicit path that does not exist falls back to defaults."""
        with patch.dict("os.environ", {}, clear=True):
            config = Config.load(self.temp_dir / "missing.yaml")

        self.assertEqual(config, Config())

    def test_only_unknown_keys(self):
        path = self.create_test_file("upload:\n  url: https://example.com\n")

        self.assertEqual(Config.from_file(path), Config())

    def test_bad_workers_env(self):
        path = self.create_test_file("workers: 2\n")

        with patch.dict("os.environ", {"PROCSNAP_WORKERS": "two"}, clear=True):
            with self.assertRaises(ValueError):
                Config.load(path)

    def test_root_without_proc(self):
        """A root that lacks /proc cannot produce a snapshot."""
        config = Config(root=str(self.temp_dir))

        with self.assertRaises(SourceUnavailable):
            ProcSnap(config)

    def test_invalid_hddtemp_mode(self):
        """A bad hddtemp mode only fails that source when it runs."""
        config = Config(temps_hddtemp=True, hddtemp_mode="smart")

        (source,) = configure_sources(config, PseudoFileReader())

        with self.assertRaises(CollaboratorFailure):
            source.collect()
