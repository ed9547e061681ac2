"""Configuration parsing modules for tscompile."""

from .ini_parser import CompilerConfig, CompilerConfigError

__all__ = [
    "CompilerConfig",
    "CompilerConfigError",
]
