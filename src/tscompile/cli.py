"""
Command-line interface for tscompile.

This module provides the `tscompile` CLI tool for compiling single
TypeScript files with the external tsc compiler.
"""

import argparse
import dataclasses
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tscompile import __version__
from tscompile.build import CompilerOptions, TypeScriptCompiler
from tscompile.cli_utils import ErrorFormatter, PathValidator, setup_logging
from tscompile.config import CompilerConfig, CompilerConfigError
from tscompile.packages import ExecutableNotFoundError, ExecutableResolver

DEFAULT_TIMEOUT = 10.0


@dataclass
class CompileArgs:
    """Arguments for the compile command.

    Option fields left as None fall back to tscompile.ini, then to the
    CompilerOptions defaults.
    """

    input_file: Path
    output: Optional[Path] = None
    config: Optional[Path] = None
    tsc: Optional[str] = None
    timeout: Optional[float] = None
    target: Optional[str] = None
    declaration: Optional[bool] = None
    source_map: Optional[bool] = None
    map_root: Optional[str] = None
    source_root: Optional[str] = None
    remove_comments: Optional[bool] = None
    no_implicit_any: Optional[bool] = None
    no_resolve: Optional[bool] = None
    save_to_disk: Optional[bool] = None
    verbose: bool = False


@dataclass
class ResolveArgs:
    """Arguments for the resolve command."""

    tsc: Optional[str] = None
    verbose: bool = False


OPTION_FIELDS = [f.name for f in dataclasses.fields(CompilerOptions)]


def positive_float(value: str) -> float:
    """argparse type for a number of seconds greater than zero."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def load_config(args: CompileArgs) -> Optional[CompilerConfig]:
    """Load tscompile.ini from --config or from the input file's directory."""
    if args.config is not None:
        return CompilerConfig(args.config)
    return CompilerConfig.find(args.input_file.absolute().parent)


def build_compiler(args: CompileArgs) -> TypeScriptCompiler:
    """Create a compiler from command-line arguments and tscompile.ini.

    Command-line values take precedence over configuration file values.
    """
    config = load_config(args)

    options = config.get_options() if config else CompilerOptions()
    overrides = {
        name: getattr(args, name)
        for name in OPTION_FIELDS
        if getattr(args, name) is not None
    }
    options = dataclasses.replace(options, **overrides)

    timeout = args.timeout
    if timeout is None and config:
        timeout = config.get_timeout()
    if timeout is None:
        timeout = DEFAULT_TIMEOUT

    executable = args.tsc
    if executable is None and config:
        executable = config.get_executable()

    return TypeScriptCompiler(
        options=options,
        timeout=timeout,
        executable_resolver=ExecutableResolver(executable),
    )


def compile_command(args: CompileArgs) -> None:
    """Compile a TypeScript file.

    Examples:
        tscompile compile app.ts                   # Print compiled JavaScript
        tscompile compile app.ts -o app.js         # Write to app.js
        tscompile compile app.ts --source-map      # Also produce app.js.map
        tscompile compile app.ts --save-to-disk    # Write next to app.ts
        tscompile compile app.ts --target ES5 -d   # ES5 with declarations
    """
    try:
        compiler = build_compiler(args)
        result = compiler.compile(args.input_file)

        if not result.success:
            title = "Compilation timed out!" if result.timed_out else "Compilation failed!"
            ErrorFormatter.print_error(title, result.error or "")
            sys.exit(result.exit_code if result.exit_code > 0 else 1)

        if compiler.options.save_to_disk:
            if args.output is not None:
                ErrorFormatter.print_warning(
                    f"Ignoring --output {args.output}: output is saved next to the input file"
                )
            output_path = compiler.get_output_path(args.input_file.absolute())
            print(output_path)
            if compiler.options.source_map:
                print(f"{output_path}{TypeScriptCompiler.SOURCE_MAP_EXTENSION}")
        elif args.output is not None:
            args.output.write_text(result.source or "", encoding="utf-8")
            if result.source_map is not None:
                map_path = args.output.with_name(
                    args.output.name + TypeScriptCompiler.SOURCE_MAP_EXTENSION
                )
                map_path.write_text(result.source_map, encoding="utf-8")
            if args.verbose:
                ErrorFormatter.print_success(f"Wrote {args.output}")
        else:
            sys.stdout.write(result.source or "")

        sys.exit(0)

    except FileNotFoundError as e:
        ErrorFormatter.handle_file_not_found(e)
    except (ExecutableNotFoundError, CompilerConfigError) as e:
        ErrorFormatter.print_error("Error: Invalid setup", str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def resolve_command(args: ResolveArgs) -> None:
    """Print the path of the TypeScript compiler that would be used.

    Examples:
        tscompile resolve                          # Look up tsc
        tscompile resolve --tsc ./node_modules/.bin/tsc
    """
    try:
        print(ExecutableResolver(args.tsc).get_executable_path())
        sys.exit(0)
    except ExecutableNotFoundError as e:
        ErrorFormatter.print_error("TypeScript compiler not found", str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the tscompile CLI."""
    parser = argparse.ArgumentParser(
        prog="tscompile",
        description="tscompile - Compile TypeScript files with tsc",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tscompile {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Compile command
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a TypeScript file",
    )
    compile_parser.add_argument(
        "input_file",
        type=Path,
        help="TypeScript file to compile",
    )
    compile_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the compiled JavaScript to this file (default: stdout)",
    )
    compile_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: tscompile.ini next to the input, if any)",
    )
    compile_parser.add_argument(
        "--tsc",
        default=None,
        help="Path to the tsc executable (default: auto-detect)",
    )
    compile_parser.add_argument(
        "-t",
        "--timeout",
        type=positive_float,
        default=None,
        help=f"Seconds to wait for tsc (default: {DEFAULT_TIMEOUT:g})",
    )
    compile_parser.add_argument(
        "--target",
        default=None,
        help="ECMAScript target version (default: ES3)",
    )
    compile_parser.add_argument(
        "-d",
        "--declaration",
        action="store_true",
        default=None,
        help="Generate corresponding .d.ts file",
    )
    compile_parser.add_argument(
        "--source-map",
        action="store_true",
        default=None,
        help="Generate corresponding .map file",
    )
    compile_parser.add_argument(
        "--map-root",
        default=None,
        help="Location where the debugger should locate map files",
    )
    compile_parser.add_argument(
        "--source-root",
        default=None,
        help="Location where the debugger should locate TypeScript files",
    )
    compile_parser.add_argument(
        "--remove-comments",
        action="store_true",
        default=None,
        help="Do not emit comments to output",
    )
    compile_parser.add_argument(
        "--no-implicit-any",
        action="store_true",
        default=None,
        help="Warn on expressions and declarations with an implied 'any' type",
    )
    compile_parser.add_argument(
        "--no-resolve",
        action="store_true",
        default=None,
        help="Skip resolution and preprocessing",
    )
    compile_parser.add_argument(
        "--save-to-disk",
        action="store_true",
        default=None,
        help="Write output next to the input file instead of a temp directory",
    )
    compile_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    # Resolve command
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the path of the tsc executable",
    )
    resolve_parser.add_argument(
        "--tsc",
        default=None,
        help="Path to the tsc executable (default: auto-detect)",
    )
    resolve_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """tscompile - Compile TypeScript files with the tsc command-line compiler."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(parsed_args.verbose)

    if parsed_args.command == "compile":
        PathValidator.validate_input_file(parsed_args.input_file)
        compile_args = CompileArgs(
            input_file=parsed_args.input_file,
            output=parsed_args.output,
            config=parsed_args.config,
            tsc=parsed_args.tsc,
            timeout=parsed_args.timeout,
            target=parsed_args.target,
            declaration=parsed_args.declaration,
            source_map=parsed_args.source_map,
            map_root=parsed_args.map_root,
            source_root=parsed_args.source_root,
            remove_comments=parsed_args.remove_comments,
            no_implicit_any=parsed_args.no_implicit_any,
            no_resolve=parsed_args.no_resolve,
            save_to_disk=parsed_args.save_to_disk,
            verbose=parsed_args.verbose,
        )
        compile_command(compile_args)
    elif parsed_args.command == "resolve":
        resolve_args = ResolveArgs(tsc=parsed_args.tsc, verbose=parsed_args.verbose)
        resolve_command(resolve_args)


if __name__ == "__main__":
    main()
