"""
Compiler invocation components for tscompile.

This module provides:
- Compiler options (target level and tsc flags)
- The TypeScript compiler invoker (process lifecycle, output staging)
- Compile results (eager or lazily read output)
"""

from .compile_result import CompileResult
from .compiler import (
    CompilerError,
    InputFileNotFoundError,
    MissingArgumentError,
    TypeScriptCompiler,
)
from .compiler_options import CompilerOptions, CompilerOptionsError

__all__ = [
    "CompileResult",
    "CompilerError",
    "CompilerOptions",
    "CompilerOptionsError",
    "InputFileNotFoundError",
    "MissingArgumentError",
    "TypeScriptCompiler",
]
