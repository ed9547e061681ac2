"""Compiler executable lookup for tscompile."""

from .executable_resolver import (
    ExecutableNotFoundError,
    ExecutableResolver,
    IExecutableResolver,
)
from .platform_utils import PlatformDetector, PlatformError

__all__ = [
    "ExecutableNotFoundError",
    "ExecutableResolver",
    "IExecutableResolver",
    "PlatformDetector",
    "PlatformError",
]
