"""Result of a single TypeScript compilation."""

from dataclasses import dataclass
from typing import Callable, Optional

SourceReader = Callable[[], str]


@dataclass(frozen=True)
class CompileResult:
    """Outcome of a compiler invocation.

    A result either carries the compiler's diagnostic text (`error`) or the
    readers producing the compiled source and source map, never both.
    Readers are zero-argument callables; deferred results read from disk on
    every access, materialized results return text already in memory.

    Attributes:
        exit_code: Exit code of the compiler process
        error: Diagnostic text when the compilation failed or timed out
        timed_out: True when the process was killed after the timeout
    """

    exit_code: int
    error: Optional[str] = None
    timed_out: bool = False
    source_reader: Optional[SourceReader] = None
    source_map_reader: Optional[SourceReader] = None

    def __post_init__(self) -> None:
        if self.error is not None and (
            self.source_reader is not None or self.source_map_reader is not None
        ):
            raise ValueError("A failed result cannot carry output readers")
        if self.error is None and self.source_reader is None:
            raise ValueError("A successful result needs a source reader")

    @classmethod
    def failed(
        cls, exit_code: int, error: str, timed_out: bool = False
    ) -> "CompileResult":
        """Create a result for a failed or timed-out compilation."""
        return cls(exit_code=exit_code, error=error, timed_out=timed_out)

    @classmethod
    def deferred(
        cls,
        exit_code: int,
        source_reader: SourceReader,
        source_map_reader: Optional[SourceReader] = None,
    ) -> "CompileResult":
        """Create a result whose output is read only when requested."""
        return cls(
            exit_code=exit_code,
            source_reader=source_reader,
            source_map_reader=source_map_reader,
        )

    @classmethod
    def materialized(
        cls, exit_code: int, source: str, source_map: Optional[str] = None
    ) -> "CompileResult":
        """Create a result from output already read into memory."""
        return cls(
            exit_code=exit_code,
            source_reader=lambda: source,
            source_map_reader=(lambda: source_map) if source_map is not None else None,
        )

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def source(self) -> Optional[str]:
        """Compiled JavaScript, or None for a failed result."""
        if self.source_reader is None:
            return None
        return self.source_reader()

    @property
    def source_map(self) -> Optional[str]:
        """Source map contents, or None when no map was produced."""
        if self.source_map_reader is None:
            return None
        return self.source_map_reader()
