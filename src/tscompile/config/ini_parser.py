"""
tscompile.ini configuration parser.

This module provides functionality to parse tscompile.ini files and turn the
[compiler] section into compiler options, a timeout and an executable path.
"""

import configparser
from pathlib import Path
from typing import Dict, Optional

from tscompile.build.compiler_options import CompilerOptions, CompilerOptionsError


class CompilerConfigError(Exception):
    """Exception raised for tscompile.ini configuration errors."""

    pass


class CompilerConfig:
    """
    Parser for tscompile.ini configuration files.

    Example tscompile.ini:
        [compiler]
        target = ES5
        source_map = true
        timeout = 30
        executable = /usr/local/bin/tsc

    Usage:
        config = CompilerConfig(Path("tscompile.ini"))
        options = config.get_options()
        timeout = config.get_timeout()
    """

    DEFAULT_FILENAME = "tscompile.ini"
    SECTION = "compiler"

    # Keys of the [compiler] section that are not compiler options
    INVOCATION_KEYS = {"timeout", "executable"}

    def __init__(self, ini_path: Path):
        """
        Initialize the parser with a tscompile.ini file.

        Args:
            ini_path: Path to the tscompile.ini file

        Raises:
            CompilerConfigError: If the file doesn't exist or cannot be parsed
        """
        self.ini_path = ini_path

        if not ini_path.exists():
            raise CompilerConfigError(f"Configuration file not found: {ini_path}")

        # Values such as URLs and Windows paths may contain a literal $
        self.config = configparser.ConfigParser(interpolation=None)

        try:
            self.config.read(ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise CompilerConfigError(f"Failed to parse {ini_path}: {e}") from e

    @classmethod
    def find(cls, directory: Path) -> Optional["CompilerConfig"]:
        """
        Load tscompile.ini from a directory if it has one.

        Args:
            directory: Directory to look in

        Returns:
            CompilerConfig, or None if the directory has no tscompile.ini
        """
        ini_path = directory / cls.DEFAULT_FILENAME
        if not ini_path.is_file():
            return None
        return cls(ini_path)

    def get_section(self) -> Dict[str, str]:
        """
        Get the raw [compiler] section.

        Returns:
            Dictionary of key-value pairs (empty if the section is missing)
        """
        if self.SECTION not in self.config:
            return {}
        return {key: value.strip() for key, value in self.config[self.SECTION].items()}

    def get_options(self) -> CompilerOptions:
        """
        Build compiler options from the [compiler] section.

        Returns:
            CompilerOptions (defaults for keys not present)

        Raises:
            CompilerConfigError: If an option is unknown or has an invalid value
        """
        values = {
            key: value
            for key, value in self.get_section().items()
            if key not in self.INVOCATION_KEYS
        }
        try:
            return CompilerOptions.from_dict(values)
        except CompilerOptionsError as e:
            raise CompilerConfigError(f"{self.ini_path}: {e}") from e

    def get_timeout(self) -> Optional[float]:
        """
        Get the compile timeout in seconds.

        Returns:
            Timeout, or None if not configured

        Raises:
            CompilerConfigError: If the value is not a positive number
        """
        value = self.get_section().get("timeout")
        if not value:
            return None

        try:
            timeout = float(value)
        except ValueError as e:
            raise CompilerConfigError(
                f"{self.ini_path}: Invalid timeout value: {value!r}"
            ) from e

        if timeout <= 0:
            raise CompilerConfigError(
                f"{self.ini_path}: Timeout must be positive, got {value}"
            )
        return timeout

    def get_executable(self) -> Optional[str]:
        """
        Get the configured tsc executable path.

        Relative paths are resolved against the directory of the ini file.

        Returns:
            Executable path, or None if not configured
        """
        value = self.get_section().get("executable")
        if not value:
            return None

        exe = Path(value).expanduser()
        if not exe.is_absolute():
            exe = self.ini_path.parent / exe
        return str(exe)
