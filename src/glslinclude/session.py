"""State shared by every file reached while flattening one top-level unit."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple


@dataclass
class IncludeGuard:
    """One #ifndef NAME single-inclusion guard."""
    filename: str
    name: str
    line: str                          # Raw text of the #ifndef line, for diagnostics
    open_lineno: int
    close_lineno: Optional[int] = None
    define_lineno: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.close_lineno is None

    @property
    def is_defined(self) -> bool:
        return self.define_lineno is not None


@dataclass
class ParseSession:
    """Created fresh for each top-level unit and shared, by reference, with
    every recursive call made for the units it includes.

    skipping is True while inside a region whose body was already emitted
    earlier in the session.  suppression_depth counts the #ifndef scopes
    opened inside that region so that their #endif lines do not end the
    suppression early.
    """
    search_dirs: Tuple[str, ...] = ()
    guard_names: Set[str] = field(default_factory=set)
    guards: List[IncludeGuard] = field(default_factory=list)
    once_paths: Set[str] = field(default_factory=set)
    once_stack: List[Tuple[str, int]] = field(default_factory=list)
    inclusion_chain: List[str] = field(default_factory=list)
    version_accepted: bool = False
    skipping: bool = False
    suppression_kind: Optional[str] = None    # "guard" or "pragma"
    suppression_depth: int = 0
    _latest: Dict[str, IncludeGuard] = field(default_factory=dict, repr=False)

    def guard(self, name) -> Optional[IncludeGuard]:
        """The most recent guard record for name"""
        return self._latest.get(name)

    def open_guard(self, filename, name, line, lineno) -> IncludeGuard:
        guard = IncludeGuard(filename=filename, name=name, line=line, open_lineno=lineno)
        self.guards.append(guard)
        self.guard_names.add(name)
        self._latest[name] = guard
        return guard

    def innermost_open_guard(self, start=0) -> Optional[IncludeGuard]:
        """The most recently opened guard that is still open, ignoring
        the records before index start.
        """
        for guard in reversed(self.guards[start:]):
            if guard.is_open:
                return guard
        return None

    def unterminated_guards(self) -> List[IncludeGuard]:
        return [guard for guard in self.guards if guard.is_open]

    def start_suppression(self, kind):
        self.skipping = True
        self.suppression_kind = kind
        self.suppression_depth = 0

    def end_suppression(self):
        self.skipping = False
        self.suppression_kind = None
        self.suppression_depth = 0
