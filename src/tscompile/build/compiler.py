"""TypeScript compiler invoker.

This module runs the external `tsc` executable on a single input file and
turns the files it writes into a CompileResult.

Design:
    - The executable path is resolved once, when the compiler is created
    - Each compile() call starts one process and waits for it under a timeout
    - Compiler failures (non-zero exit, timeout) are results, not exceptions
    - Output goes to the temp directory (read, then deleted) unless
      save_to_disk is set, in which case it stays next to the input and is
      read lazily

Output files in temp mode are named after the input's base name, so two
concurrent temp-mode compiles of same-named inputs share output paths.
"""

import logging
import os
import shutil
import subprocess
import tempfile
from functools import partial
from pathlib import Path
from typing import List, Optional, Union

from ..packages.executable_resolver import ExecutableResolver, IExecutableResolver
from .compile_result import CompileResult
from .compiler_options import CompilerOptions
from .process_utils import hidden_window_flags, kill_process_tree

PathLike = Union[str, os.PathLike]


class CompilerError(Exception):
    """Base exception for compiler invocation errors."""

    pass


class MissingArgumentError(CompilerError, ValueError):
    """Raised when no input file path is given."""

    pass


class InputFileNotFoundError(CompilerError, FileNotFoundError):
    """Raised when the input file does not exist."""

    pass


def _read_text(path: Path) -> str:
    # utf-8-sig drops a leading byte-order mark
    return path.read_text(encoding="utf-8-sig")


class TypeScriptCompiler:
    """Compiles TypeScript files with the external `tsc` executable."""

    # Exit code reported when the process was killed after the timeout
    TIMEOUT_EXIT_CODE = -1

    OUTPUT_EXTENSION = ".js"
    SOURCE_MAP_EXTENSION = ".map"

    # Environment variable exposing the input path to the compiler process
    FILE_ENV_VAR = "file"

    def __init__(
        self,
        options: Optional[CompilerOptions] = None,
        timeout: float = 10.0,
        executable_resolver: Optional[IExecutableResolver] = None,
    ):
        """Initialize compiler.

        Args:
            options: Compiler options (defaults to CompilerOptions())
            timeout: Seconds to wait for the compiler before killing it
            executable_resolver: Resolver for the tsc executable

        Raises:
            ExecutableNotFoundError: If the resolver cannot find tsc
        """
        self._options = options if options is not None else CompilerOptions()
        self.timeout = timeout

        if executable_resolver is None:
            executable_resolver = ExecutableResolver()

        self._executable_path = executable_resolver.get_executable_path()
        logging.debug(f"Using TypeScript compiler: {self._executable_path}")

    @property
    def options(self) -> CompilerOptions:
        return self._options

    @property
    def executable_path(self) -> str:
        return self._executable_path

    def compile(self, file_path: Optional[PathLike]) -> CompileResult:
        """Compile a single TypeScript file.

        Args:
            file_path: Path to the .ts input file

        Returns:
            CompileResult with the compiled output or the compiler diagnostics

        Raises:
            MissingArgumentError: If file_path is None or empty
            InputFileNotFoundError: If file_path does not exist
            OSError: If the process cannot be started or files cannot be
                copied, read or deleted
        """
        if file_path is None or str(file_path) == "":
            raise MissingArgumentError("file_path is required")

        source_path = Path(file_path).absolute()
        if not source_path.is_file():
            raise InputFileNotFoundError(f"File does not exist: {file_path}")

        output_folder = self.get_output_folder(source_path)

        staged_input: Optional[Path] = None
        if self._options.source_map and not self._options.save_to_disk:
            # The map references the source relative to the output, so the
            # input has to sit in the output folder too
            staged_path = output_folder / source_path.name
            if staged_path.resolve() != source_path.resolve():
                shutil.copyfile(source_path, staged_path)
                staged_input = staged_path
                source_path = staged_path

        output_path = self.get_output_path(source_path)
        source_map_path = output_path.with_name(output_path.name + self.SOURCE_MAP_EXTENSION)

        command = [self._executable_path, *self.build_arguments(source_path, output_folder)]
        logging.debug(f"Running: {self._executable_path} {self.get_args(source_path, output_folder)}")

        env = os.environ.copy()
        env[self.FILE_ENV_VAR] = str(source_path)

        with subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            text=True,
            encoding="utf-8",
            errors="replace",
            creationflags=hidden_window_flags(),
        ) as process:
            try:
                stdout, stderr = process.communicate(timeout=self.timeout)
            except subprocess.TimeoutExpired:
                logging.warning(
                    f"Compilation of {source_path.name} timed out after {self.timeout}s, killing compiler"
                )
                kill_process_tree(process.pid)
                stdout, stderr = process.communicate()
                return CompileResult.failed(
                    self.TIMEOUT_EXIT_CODE,
                    self._diagnostics(stdout, stderr),
                    timed_out=True,
                )
            except BaseException:
                kill_process_tree(process.pid)
                raise

            exit_code = process.returncode

        if exit_code != 0:
            logging.info(f"Compilation of {source_path.name} failed with exit code {exit_code}")
            return CompileResult.failed(exit_code, self._diagnostics(stdout, stderr))

        if self._options.save_to_disk:
            source_map_reader = None
            if self._options.source_map:
                source_map_reader = partial(_read_text, source_map_path)
            return CompileResult.deferred(
                exit_code, partial(_read_text, output_path), source_map_reader
            )

        # Temporary output: read it, then remove it
        source = _read_text(output_path)
        output_path.unlink()

        source_map = None
        if self._options.source_map:
            source_map = _read_text(source_map_path)
            source_map_path.unlink()
            if staged_input is not None:
                staged_input.unlink()

        return CompileResult.materialized(exit_code, source, source_map)

    def get_output_folder(self, source_path: Path) -> Path:
        """Get the folder the compiler writes its output to.

        Args:
            source_path: Absolute path of the input file

        Returns:
            The input's folder when saving to disk, the temp directory otherwise
        """
        if self._options.save_to_disk:
            return source_path.parent
        return Path(tempfile.gettempdir())

    def get_output_path(self, source_path: Path) -> Path:
        """Get the path of the compiled .js file for an input file."""
        output_name = Path(source_path.name).with_suffix(self.OUTPUT_EXTENSION).name
        return self.get_output_folder(source_path) / output_name

    def get_args(self, file_path: PathLike, output_folder: PathLike) -> str:
        """Build the compiler argument string.

        Args:
            file_path: Input file passed to tsc
            output_folder: Value for --outDir

        Returns:
            Argument string, e.g. '"a.ts" --outDir "/tmp" --target ES5 --sourceMap'
        """
        args = f'"{file_path}" --outDir "{output_folder}" --target {self._options.target}'
        for flag in self._optional_flags():
            args += " " + " ".join(flag)
        return args

    def build_arguments(self, file_path: PathLike, output_folder: PathLike) -> List[str]:
        """Build the compiler argument list passed to the process.

        Same tokens and order as get_args(), without quoting.
        """
        args = [str(file_path), "--outDir", str(output_folder), "--target", self._options.target]
        for flag in self._optional_flags():
            args.extend(flag)
        return args

    def _optional_flags(self) -> List[List[str]]:
        opts = self._options
        flags: List[List[str]] = []

        if opts.declaration:
            flags.append(["-d"])
        if opts.map_root is not None:
            flags.append(["--mapRoot", opts.map_root])
        if opts.no_implicit_any:
            flags.append(["--noImplicitAny"])
        if opts.no_resolve:
            flags.append(["--noResolve"])
        if opts.remove_comments:
            flags.append(["--removeComments"])
        if opts.source_map:
            flags.append(["--sourceMap"])
        if opts.source_root is not None:
            flags.append(["--sourceRoot", opts.source_root])

        return flags

    @staticmethod
    def _diagnostics(stdout: Optional[str], stderr: Optional[str]) -> str:
        # Newer tsc releases report diagnostics on stdout
        if stderr and stderr.strip():
            return stderr
        return stdout or ""
