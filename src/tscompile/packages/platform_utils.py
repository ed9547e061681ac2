"""Platform Detection Utilities.

This module provides utilities for detecting the current platform and the
names the TypeScript compiler executable goes by on it.

Supported Platforms:
    - Windows: tsc.cmd (npm shim), tsc.exe (TypeScript SDK)
    - Linux: tsc
    - macOS: tsc
"""

import platform
from typing import List, Literal, Optional

PlatformName = Literal["windows", "linux", "darwin"]


class PlatformError(Exception):
    """Raised when platform detection fails or platform is unsupported."""

    pass


class PlatformDetector:
    """Detects the current platform for compiler executable lookup."""

    EXECUTABLE_NAMES = {
        "windows": ["tsc.cmd", "tsc.exe", "tsc"],
        "linux": ["tsc"],
        "darwin": ["tsc"],
    }

    @staticmethod
    def detect_platform() -> PlatformName:
        """Detect the current platform.

        Returns:
            Platform identifier ('windows', 'linux' or 'darwin')

        Raises:
            PlatformError: If platform is unsupported
        """
        system = platform.system().lower()

        if system == "windows" or system.startswith(("cygwin", "msys")):
            return "windows"
        elif system == "linux":
            return "linux"
        elif system == "darwin":
            return "darwin"
        else:
            raise PlatformError(f"Unsupported platform: {system} {platform.machine()}")

    @classmethod
    def executable_names(cls, plat: Optional[PlatformName] = None) -> List[str]:
        """Get candidate compiler executable names for a platform.

        Args:
            plat: Platform identifier (default: the current platform)

        Returns:
            Executable names in lookup order
        """
        if plat is None:
            plat = cls.detect_platform()
        return list(cls.EXECUTABLE_NAMES[plat])
