"""Formatting of preprocessor errors.

Every failure the preprocessor detects is raised exactly once as one of the
exceptions below.  The message is rendered up front by format_diagnostic so
that the exception text is the complete, caret-pointed report:

    In file 'shaders/color.frag' on line 7: error: #endif without matching #ifndef
        7 | #endif
          | ^

As the error unwinds through nested #include frames, each frame appends an
"included from" line, giving an inclusion backtrace.
"""

from typing import List, Optional, Tuple


def _normalize(text):
    return str(text).rstrip("\r\n")


def format_diagnostic(filename: str, line: Optional[str], lineno: int, message: str, column: int = 0) -> str:
    """Render the three line error report.

    Args:
        filename: File the error is reported against
        line:     The offending source line, or None when there isn't one
        lineno:   1-based line number of the offending line
        message:  Description of the error
        column:   0-based offset of the caret within the source line
    """
    header = f"In file '{_normalize(filename)}' on line {lineno}: error: {_normalize(message)}"
    if line is None:
        return header

    line = _normalize(line)
    gutter = f"{lineno:>5} | "
    padding = " " * (len(gutter) - 2) + "| "
    column = max(0, min(column, len(line)))
    # Reuse tabs from the source line so the caret lines up in a terminal
    indent = "".join(ch if ch == "\t" else " " for ch in line[:column])
    return "\n".join([header, gutter + line, padding + indent + "^"])


class PreprocessorError(Exception):
    """Base class of every error raised while flattening a source unit."""

    kind = "preprocessor error"

    def __init__(self, message, filename, lineno=0, line=None, column=0):
        self.message = _normalize(message)
        self.filename = filename
        self.lineno = lineno
        self.line = line
        self.column = column
        self.trail: List[Tuple[str, int]] = []
        self.report = format_diagnostic(filename, line, lineno, message, column)
        super().__init__(self.report)

    def add_inclusion(self, filename, lineno):
        """Record that the failing unit was reached from filename:lineno."""
        self.trail.append((filename, lineno))
        self.report = "\n".join([self.report, f"    included from: '{filename}', line {lineno}"])
        self.args = (self.report,)
        return self

    def __str__(self):
        return self.report


class UnreadableUnitError(PreprocessorError):
    """The source unit could not be opened or decoded."""

    kind = "unit unreadable"


class MalformedDirectiveError(PreprocessorError):
    """A directive has a missing, empty or badly delimited argument."""

    kind = "directive malformed"


class StructuralMismatchError(PreprocessorError):
    """#endif without #ifndef, or a guard or /* comment still open at the end of the unit."""

    kind = "structural mismatch"


class OrderingError(PreprocessorError):
    """A statement appeared before the #version line was accepted."""

    kind = "ordering violation"


class InclusionError(PreprocessorError):
    """An #include target could not be found or nests too deeply."""

    kind = "inclusion failure"
