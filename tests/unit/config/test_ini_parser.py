"""
Unit tests for tscompile.ini parser.
"""

import pytest
from pathlib import Path
from tscompile.build.compiler_options import CompilerOptions
from tscompile.config.ini_parser import CompilerConfig, CompilerConfigError


class TestCompilerConfig:
    """Test suite for CompilerConfig parser."""

    @pytest.fixture
    def tmp_ini_path(self, tmp_path):
        """Fixture to provide a temporary INI file path."""
        return tmp_path / "tscompile.ini"

    @pytest.fixture
    def full_config(self, tmp_ini_path):
        """Create config with options, timeout and executable."""
        content = """
[compiler]
target = ES5
declaration = true
source_map = yes
map_root = /maps
save_to_disk = false
timeout = 30
executable = node_modules/.bin/tsc
"""
        tmp_ini_path.write_text(content)
        return tmp_ini_path

    def test_file_not_found(self, tmp_path):
        """Test error when the file doesn't exist."""
        with pytest.raises(CompilerConfigError, match="Configuration file not found"):
            CompilerConfig(tmp_path / "missing.ini")

    def test_invalid_ini(self, tmp_ini_path):
        """Test error on unparsable content."""
        tmp_ini_path.write_text("target = ES5\n[compiler\n")

        with pytest.raises(CompilerConfigError, match="Failed to parse"):
            CompilerConfig(tmp_ini_path)

    def test_get_options(self, full_config):
        """Test options are built from the [compiler] section."""
        options = CompilerConfig(full_config).get_options()

        assert options == CompilerOptions(
            target="ES5", declaration=True, source_map=True, map_root="/maps"
        )

    def test_get_options_missing_section(self, tmp_ini_path):
        """Test defaults when there is no [compiler] section."""
        tmp_ini_path.write_text("[other]\nkey = value\n")

        config = CompilerConfig(tmp_ini_path)

        assert config.get_section() == {}
        assert config.get_options() == CompilerOptions()
        assert config.get_timeout() is None
        assert config.get_executable() is None

    def test_get_options_unknown_key(self, tmp_ini_path):
        tmp_ini_path.write_text("[compiler]\nout_file = bundle.js\n")

        with pytest.raises(CompilerConfigError, match="Unknown compiler option"):
            CompilerConfig(tmp_ini_path).get_options()

    def test_get_options_invalid_bool(self, tmp_ini_path):
        tmp_ini_path.write_text("[compiler]\nsource_map = sometimes\n")

        with pytest.raises(CompilerConfigError, match="Invalid boolean value"):
            CompilerConfig(tmp_ini_path).get_options()

    def test_get_timeout(self, full_config):
        assert CompilerConfig(full_config).get_timeout() == 30.0

    @pytest.mark.parametrize("value", ["soon", "0", "-5"])
    def test_get_timeout_invalid(self, tmp_ini_path, value):
        tmp_ini_path.write_text(f"[compiler]\ntimeout = {value}\n")

        with pytest.raises(CompilerConfigError):
            CompilerConfig(tmp_ini_path).get_timeout()

    def test_get_executable_relative(self, full_config):
        """Test relative executable paths resolve against the ini directory."""
        exe = CompilerConfig(full_config).get_executable()

        assert Path(exe) == full_config.parent / "node_modules" / ".bin" / "tsc"

    def test_get_executable_absolute(self, tmp_ini_path, tmp_path):
        tsc = tmp_path / "opt" / "tsc"
        tmp_ini_path.write_text(f"[compiler]\nexecutable = {tsc}\n")

        assert CompilerConfig(tmp_ini_path).get_executable() == str(tsc)

    def test_find(self, full_config, tmp_path):
        """Test lookup of tscompile.ini in a directory."""
        config = CompilerConfig.find(tmp_path)

        assert config is not None
        assert config.ini_path == full_config

    def test_find_missing(self, tmp_path):
        assert CompilerConfig.find(tmp_path / "nowhere") is None

    def test_dollar_sign_kept_literally(self, tmp_ini_path):
        """Test values containing $ are read as-is."""
        tmp_ini_path.write_text(
            "[compiler]\nsource_root = https://cdn/$build/src\nmap_root = C:\\$maps\n"
        )

        options = CompilerConfig(tmp_ini_path).get_options()

        assert options.source_root == "https://cdn/$build/src"
        assert options.map_root == "C:\\$maps"
