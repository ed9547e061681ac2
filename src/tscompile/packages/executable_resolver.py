"""TypeScript compiler executable resolution.

This module locates the `tsc` executable the compiler wraps. Installing the
compiler is not handled here; a resolver only finds what is already present.

Lookup order of the default resolver:
    1. Explicit executable path (e.g. from --tsc or tscompile.ini)
    2. TSC_PATH environment variable
    3. PATH lookup of the platform's executable names
    4. Windows only: installed TypeScript SDKs, highest version first
       (Program Files/Microsoft SDKs/TypeScript/<version>/tsc.exe)
"""

import logging
import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple

from .platform_utils import PlatformDetector, PlatformError


class ExecutableNotFoundError(Exception):
    """Raised when no TypeScript compiler executable can be found."""

    pass


class IExecutableResolver(ABC):
    """Interface for compiler executable resolvers."""

    @abstractmethod
    def get_executable_path(self) -> str:
        """Get the absolute path to the compiler executable.

        Returns:
            Absolute path to the executable

        Raises:
            ExecutableNotFoundError: If no executable can be found
        """
        pass


class ExecutableResolver(IExecutableResolver):
    """Default resolver for the `tsc` executable."""

    ENV_VAR = "TSC_PATH"

    # Parent directories of TypeScript SDK installs on Windows
    SDK_ROOT_ENV_VARS = ["ProgramFiles(x86)", "ProgramFiles"]

    def __init__(
        self,
        executable_path: Optional[str] = None,
        sdk_roots: Optional[List[Path]] = None,
    ):
        """Initialize resolver.

        Args:
            executable_path: Explicit executable path, bypasses the lookup
            sdk_roots: Override for the Windows TypeScript SDK directories
        """
        self.executable_path = executable_path
        self._sdk_roots = sdk_roots

    def get_executable_path(self) -> str:
        if self.executable_path:
            return self._check_explicit(self.executable_path, "Configured executable")

        env_path = os.environ.get(self.ENV_VAR)
        if env_path:
            return self._check_explicit(env_path, f"{self.ENV_VAR}")

        searched: List[str] = []

        try:
            plat = PlatformDetector.detect_platform()
        except PlatformError as e:
            raise ExecutableNotFoundError(str(e)) from e

        for name in PlatformDetector.executable_names(plat):
            found = shutil.which(name)
            searched.append(f"PATH:{name}")
            if found:
                logging.debug(f"Found TypeScript compiler on PATH: {found}")
                return str(Path(found).absolute())

        if plat == "windows":
            for sdk_root in self.get_sdk_roots():
                searched.append(str(sdk_root))
                sdk_exe = self._find_latest_sdk(sdk_root)
                if sdk_exe is not None:
                    logging.debug(f"Found TypeScript SDK compiler: {sdk_exe}")
                    return str(sdk_exe.absolute())

        raise ExecutableNotFoundError(
            "TypeScript compiler (tsc) not found. Install it with 'npm install -g typescript' "
            + f"or set {self.ENV_VAR}. Searched: {', '.join(searched)}"
        )

    def get_sdk_roots(self) -> List[Path]:
        """Get directories that may contain TypeScript SDK versions.

        Returns:
            List of '<Program Files>/Microsoft SDKs/TypeScript' directories
        """
        if self._sdk_roots is not None:
            return list(self._sdk_roots)

        roots = []
        for env_var in self.SDK_ROOT_ENV_VARS:
            program_files = os.environ.get(env_var)
            if program_files:
                root = Path(program_files) / "Microsoft SDKs" / "TypeScript"
                if root not in roots:
                    roots.append(root)
        return roots

    @staticmethod
    def _check_explicit(path: str, source: str) -> str:
        exe = Path(path)
        if not exe.is_file():
            raise ExecutableNotFoundError(f"{source} does not exist: {path}")
        return str(exe.absolute())

    @staticmethod
    def _version_key(name: str) -> Optional[Tuple[int, ...]]:
        try:
            return tuple(int(part) for part in name.split("."))
        except ValueError:
            return None

    def _find_latest_sdk(self, sdk_root: Path) -> Optional[Path]:
        """Find tsc.exe of the highest installed SDK version.

        Args:
            sdk_root: Directory containing one subdirectory per SDK version

        Returns:
            Path to tsc.exe, or None if no version has one
        """
        if not sdk_root.is_dir():
            return None

        versions = []
        for item in sdk_root.iterdir():
            key = self._version_key(item.name)
            if item.is_dir() and key is not None:
                versions.append((key, item))

        for _key, version_dir in sorted(versions, reverse=True):
            exe = version_dir / "tsc.exe"
            if exe.is_file():
                return exe

        return None
