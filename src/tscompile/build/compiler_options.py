"""Compiler options for the TypeScript compiler.

This module defines the immutable set of options that controls how the
external `tsc` executable is invoked.

Design:
    - Options are a frozen dataclass, created once and shared read-only
    - Every option maps to at most one `tsc` command-line flag
    - `save_to_disk` selects the output location and has no flag of its own
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


class CompilerOptionsError(Exception):
    """Raised when compiler options cannot be built from configuration values."""

    pass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise CompilerOptionsError(f"Invalid boolean value for '{key}': {value!r}")


@dataclass(frozen=True)
class CompilerOptions:
    """Options passed to the TypeScript compiler.

    Attributes:
        target: ECMAScript target level (e.g. "ES3", "ES5")
        declaration: Emit .d.ts declaration files (-d)
        source_map: Emit a .js.map file next to the output (--sourceMap)
        map_root: Location the debugger should find map files at (--mapRoot)
        source_root: Location the debugger should find sources at (--sourceRoot)
        remove_comments: Strip comments from the output (--removeComments)
        no_implicit_any: Error on expressions with an implied 'any' type (--noImplicitAny)
        no_resolve: Skip resolution of referenced files (--noResolve)
        save_to_disk: Write output next to the input instead of the temp directory
    """

    target: str = "ES3"
    declaration: bool = False
    source_map: bool = False
    map_root: Optional[str] = None
    source_root: Optional[str] = None
    remove_comments: bool = False
    no_implicit_any: bool = False
    no_resolve: bool = False
    save_to_disk: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompilerOptions":
        """Create options from a mapping of raw configuration values.

        Boolean fields accept the usual INI spellings (true/false, yes/no,
        on/off, 1/0). Empty strings for path fields are treated as unset.

        Args:
            data: Mapping of option name to value

        Returns:
            CompilerOptions instance

        Raises:
            CompilerOptionsError: If a key is unknown or a value is invalid
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise CompilerOptionsError(
                f"Unknown compiler option(s): {', '.join(unknown)}. "
                + f"Valid options: {', '.join(sorted(known))}"
            )

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if known[key].type in (bool, "bool"):
                kwargs[key] = _parse_bool(key, value)
            elif value is None or str(value).strip() == "":
                if key == "target":
                    raise CompilerOptionsError("Option 'target' cannot be empty")
                kwargs[key] = None
            else:
                kwargs[key] = str(value).strip()

        return cls(**kwargs)
