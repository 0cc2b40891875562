"""Classify a logical line as one of the supported directives.

Only six directives are understood.  Any other line, including lines that
start with a '#' this module does not know about (#if, #extension, ...), is a
PlainLine that is passed through verbatim.
"""

import re
from dataclasses import dataclass


class DirectiveSyntaxError(ValueError):
    """A recognised directive with a missing or malformed argument.

    Carries the column the caret should point at; the preprocessor attaches
    the file and line context.
    """

    def __init__(self, message, column=0):
        super().__init__(message)
        self.message = message
        self.column = column


@dataclass(frozen=True)
class Version:
    text: str


@dataclass(frozen=True)
class Include:
    target: str
    angled: bool


@dataclass(frozen=True)
class PragmaOnce:
    pass


@dataclass(frozen=True)
class GuardOpen:
    name: str


@dataclass(frozen=True)
class GuardClose:
    pass


@dataclass(frozen=True)
class Define:
    name: str
    text: str


@dataclass(frozen=True)
class PlainLine:
    text: str


# Leading whitespace and whitespace between '#' and the keyword are allowed
_DIRECTIVE_RE = re.compile(r"^(\s*)#\s*([A-Za-z_]\w*)")
_NAME_RE = re.compile(r"[A-Za-z_]\w*")


def _argument(line, start):
    """Return (argument, column) of the text following the directive keyword."""
    rest = line[start:].rstrip("\r\n")
    stripped = rest.lstrip()
    return stripped.rstrip(), start + len(rest) - len(stripped)


def _name(keyword, line, start):
    argument, column = _argument(line, start)
    if not argument:
        raise DirectiveSyntaxError(f"#{keyword} requires a macro name", column)
    match = _NAME_RE.match(argument)
    if not match:
        raise DirectiveSyntaxError(f"#{keyword} expects a macro name but found '{argument.split()[0]}'", column)
    return match.group(0)


def _include_target(line, start):
    argument, column = _argument(line, start)
    if not argument:
        raise DirectiveSyntaxError('Empty #include directive. Expected <filename> or "filename"', column)

    opening, closing = argument[0], argument[-1]
    if len(argument) > 2 and ((opening, closing) == ("<", ">") or (opening, closing) == ('"', '"')):
        target = argument[1:-1]
        if target.strip() and '"' not in target and "<" not in target and ">" not in target:
            return Include(target=target.strip(), angled=opening == "<")
    raise DirectiveSyntaxError('Formatting mismatch in #include. Expected <filename> or "filename"', column)


def parse_directive(line):
    """Return the Directive that line holds.  Raises DirectiveSyntaxError."""
    match = _DIRECTIVE_RE.match(line)
    if not match:
        return PlainLine(line)

    keyword = match.group(2)
    end = match.end()
    if keyword == "version":
        argument, column = _argument(line, end)
        if not argument:
            raise DirectiveSyntaxError("#version requires a version number", column)
        return Version(line)
    if keyword == "include":
        return _include_target(line, end)
    if keyword == "pragma":
        argument, column = _argument(line, end)
        if argument != "once":
            found = f"'{argument}'" if argument else "nothing"
            raise DirectiveSyntaxError(f"Unsupported #pragma argument. Expected 'once' but found {found}", column)
        return PragmaOnce()
    if keyword == "ifndef":
        return GuardOpen(_name(keyword, line, end))
    if keyword == "define":
        return Define(_name(keyword, line, end), line)
    if keyword == "endif":
        return GuardClose()
    return PlainLine(line)
