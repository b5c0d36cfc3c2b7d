"""Tests for configuration module"""
import os
import tempfile
from pathlib import Path
from unittest.mock import patch
import pytest
from pydantic import ValidationError

from config import Config


class TestConfig:
    """Test configuration validation and parsing"""

    def test_default_config(self):
        """Test default configuration values"""
        config = Config()

        assert config.root_directory == Path.cwd()
        assert config.procstat_command == "procstat"
        assert config.ps_command == "ps"
        assert config.platform_override is None
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.service_name == "process-env-reader"

    def test_environment_override(self, tmp_path):
        """Test configuration override from environment variables"""
        env_vars = {
            "PROCENV_ROOT_DIRECTORY": str(tmp_path),
            "PROCENV_PROCSTAT_COMMAND": "/usr/bin/procstat",
            "PROCENV_PS_COMMAND": "/bin/ps",
            "PROCENV_PLATFORM_OVERRIDE": "Windows",
            "PROCENV_LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env_vars):
            config = Config()

            assert config.root_directory == tmp_path
            assert config.procstat_command == "/usr/bin/procstat"
            assert config.ps_command == "/bin/ps"
            assert config.platform_override == "windows"
            assert config.log_level == "DEBUG"

    def test_validation_root_directory(self, tmp_path):
        """Test that the subprocess working directory must exist"""
        with patch.dict(os.environ, {"PROCENV_ROOT_DIRECTORY": str(tmp_path / "missing")}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_platform_override(self):
        """Test rejection of unknown platform families"""
        with patch.dict(os.environ, {"PROCENV_PLATFORM_OVERRIDE": "plan9"}):
            with pytest.raises(ValidationError):
                Config()

    def test_empty_platform_override(self):
        with patch.dict(os.environ, {"PROCENV_PLATFORM_OVERRIDE": ""}):
            assert Config().platform_override is None

    def test_validation_log_level(self):
        with patch.dict(os.environ, {"PROCENV_LOG_LEVEL": "VERBOSE"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_empty_command(self):
        with patch.dict(os.environ, {"PROCENV_PS_COMMAND": ""}):
            with pytest.raises(ValidationError):
                Config()

    def test_directory_creation(self):
        """Test that parent directories are created for the log file"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = Path(tmp_dir) / "subdir" / "test.log"

            with patch.dict(os.environ, {"PROCENV_LOG_FILE": str(log_file)}):
                config = Config()

                assert config.log_file == log_file
                assert config.log_file.parent.exists()
