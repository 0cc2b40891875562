"""Flatten a shader source unit and everything it includes.

The directives understood are

    #version ...           kept the first time it is seen, dropped afterwards
    #include <name>        searched for in the registered include directories
    #include "name"        relative to the including file, then the working directory
    #pragma once           the rest of this file is emitted at most once per session
    #ifndef NAME           opens a single-inclusion guard
    #define NAME           defines the open guard NAME, otherwise passed through
    #endif                 closes the innermost open guard

Lines before the first accepted #version are dropped.  Any other line,
including other '#' lines, is copied to the output verbatim.
"""

import argparse
import os
import sys

import glslinclude.apptools
import glslinclude.utils
import glslinclude.wrappedos
from glslinclude.diagnostics import (
    InclusionError,
    MalformedDirectiveError,
    OrderingError,
    PreprocessorError,
    StructuralMismatchError,
)
from glslinclude.directives import (
    Define,
    DirectiveSyntaxError,
    GuardClose,
    GuardOpen,
    Include,
    PlainLine,
    PragmaOnce,
    Version,
    parse_directive,
)
from glslinclude.linereader import LineReader
from glslinclude.postprocess import collapse_newlines
from glslinclude.session import ParseSession

DEFAULT_MAX_INCLUDE_DEPTH = 64


def add_arguments(cap):
    """ Add the command line arguments that the ShaderPreprocessor requires """
    glslinclude.apptools.add_common_arguments(cap)
    cap.add(
        "--max-include-depth",
        dest="max_include_depth",
        type=int,
        default=DEFAULT_MAX_INCLUDE_DEPTH,
        help="Maximum nesting of #include before giving up. "
             "Catches files that include themselves without a guard.")
    glslinclude.utils.add_flag_argument(
        parser=cap,
        name="strip-trailing-newline",
        dest="strip_trailing_newline",
        default=False,
        help="Remove the final newline from the flattened source.")


def default_args(**overrides):
    """ The arguments a ShaderPreprocessor uses when none are parsed """
    args = argparse.Namespace(
        verbose=0,
        include=[],
        max_include_depth=DEFAULT_MAX_INCLUDE_DEPTH,
        strip_trailing_newline=False,
    )
    for key, value in overrides.items():
        setattr(args, key, value)
    return args


def _indentation(line):
    return len(line) - len(line.lstrip())


class ShaderPreprocessor(object):
    """ Resolve #include, #pragma once and #ifndef guards in shader sources.

        The object only holds configuration (chiefly the include directories).
        All parse state lives in a ParseSession that is created for each
        top-level unit, so one preprocessor may flatten many units,
        including from several threads as long as no include directories
        are added meanwhile.
    """

    def __init__(self, args=None):
        if args is None:
            args = default_args()
        self.args = args
        self.include_dirs = [
            glslinclude.utils.normalize_directory(path)
            for path in (getattr(args, "include", None) or [])]
        self.max_include_depth = getattr(
            args, "max_include_depth", DEFAULT_MAX_INCLUDE_DEPTH)
        if self.args.verbose >= 3:
            print("Include directories=" + str(self.include_dirs), file=sys.stderr)

    def add_include_directory(self, path):
        """ Append a directory to the search list for #include <name>.
            Registration order is search order.
        """
        self.include_dirs.append(glslinclude.utils.normalize_directory(path))

    def create_session(self):
        return ParseSession(search_dirs=tuple(self.include_dirs))

    def flatten(self, filename):
        """ process_unit followed by the newline condensing """
        return collapse_newlines(
            self.process_unit(filename),
            strip_trailing=getattr(self.args, "strip_trailing_newline", False))

    def process_unit(self, filename):
        """ Return the flattened source of the top-level unit filename.
            Raises a PreprocessorError on the first problem found.
        """
        if self.args.verbose >= 1:
            print("Preprocessing " + filename, file=sys.stderr)
        session = self.create_session()
        output = []
        self._process_file(filename, session, output)
        self.validate_include_guard_scope(session)
        return "".join(output)

    def validate_include_guard_scope(self, session):
        """ Every guard must have been closed by the end of the session.
            The error points at the #ifndef that was left open.
        """
        for guard in session.unterminated_guards():
            raise StructuralMismatchError(
                f"unterminated #ifndef {guard.name}",
                guard.filename,
                guard.open_lineno,
                guard.line,
                guard.line.find(guard.name, guard.line.find("ifndef")))

    def _process_file(self, filename, session, output):
        if self.args.verbose >= 4:
            print("ShaderPreprocessor::_process_file: " + filename, file=sys.stderr)

        realpath = glslinclude.wrappedos.realpath(filename)
        session.inclusion_chain.append(realpath)
        once_pushed = False
        once_suppressed = False
        guard_mark = len(session.guards)

        with LineReader.open(filename) as reader:
            for lineno, line in reader:
                directive = self._parse(filename, lineno, line)
                if self.args.verbose >= 7 and not isinstance(directive, PlainLine):
                    print(f"ShaderPreprocessor: {filename}:{lineno} {directive}", file=sys.stderr)

                if isinstance(directive, PlainLine):
                    if session.version_accepted and not session.skipping:
                        output.append(line)

                elif isinstance(directive, Version):
                    if session.skipping:
                        continue
                    if not session.version_accepted:
                        session.version_accepted = True
                        output.append(line)
                    elif self.args.verbose >= 2:
                        print(f"Dropping repeated #version at {filename}:{lineno}", file=sys.stderr)

                elif isinstance(directive, Include):
                    if not session.skipping:
                        self._include(directive, filename, lineno, line, session, output)

                elif isinstance(directive, PragmaOnce):
                    if session.skipping:
                        continue
                    if realpath in session.once_paths:
                        session.start_suppression("pragma")
                        once_suppressed = True
                    else:
                        session.once_paths.add(realpath)
                        session.once_stack.append((realpath, lineno))
                        once_pushed = True

                elif isinstance(directive, GuardOpen):
                    self._guard_open(directive, filename, lineno, line, session)

                elif isinstance(directive, Define):
                    self._define(directive, filename, lineno, line, session, output)

                elif isinstance(directive, GuardClose):
                    self._guard_close(filename, lineno, line, session, guard_mark)

        # A pragma suppression only ever covers the file that started it
        if once_suppressed and session.suppression_kind == "pragma":
            session.end_suppression()
        if once_pushed:
            session.once_stack.pop()
        session.inclusion_chain.pop()

    def _parse(self, filename, lineno, line):
        try:
            return parse_directive(line)
        except DirectiveSyntaxError as err:
            raise MalformedDirectiveError(err.message, filename, lineno, line, err.column) from None

    def _guard_open(self, directive, filename, lineno, line, session):
        if session.skipping:
            session.suppression_depth += 1
            return

        guard = session.guard(directive.name)
        if guard is None:
            session.open_guard(filename, directive.name, line, lineno)
        elif guard.is_defined:
            if self.args.verbose >= 5:
                print(
                    f"ShaderPreprocessor: {directive.name} already satisfied at "
                    f"{guard.filename}:{guard.define_lineno}. Skipping {filename}:{lineno}",
                    file=sys.stderr)
            session.start_suppression("guard")
        elif not guard.is_open:
            # Closed without ever being defined so the body is emitted again
            session.open_guard(filename, directive.name, line, lineno)

    def _define(self, directive, filename, lineno, line, session, output):
        if session.skipping:
            return

        guard = session.guard(directive.name)
        if guard is not None and guard.is_open:
            if not guard.is_defined:
                guard.define_lineno = lineno
            return

        if not session.version_accepted:
            raise OrderingError(
                f"#define {directive.name} appears before the #version directive. "
                "#version must be the first statement",
                filename, lineno, line, _indentation(line))
        output.append(line)

    def _guard_close(self, filename, lineno, line, session, guard_mark=0):
        if session.skipping:
            if session.suppression_depth > 0:
                session.suppression_depth -= 1
            elif session.suppression_kind == "guard":
                session.end_suppression()
            else:
                # Guards opened by this file before its #pragma once still need closing
                guard = session.innermost_open_guard(guard_mark)
                if guard is not None:
                    guard.close_lineno = lineno
            return

        guard = session.innermost_open_guard()
        if guard is None:
            raise StructuralMismatchError(
                "#endif without matching #ifndef", filename, lineno, line, _indentation(line))
        guard.close_lineno = lineno

    def _resolve(self, directive, filename, lineno, line, session):
        """ Return the path of the file that directive refers to """
        column = max(0, line.find(directive.target) - 1)
        if directive.angled:
            for include_dir in session.search_dirs:
                trialpath = include_dir + directive.target
                if glslinclude.wrappedos.isfile(trialpath):
                    return trialpath
            searched = ", ".join(f"'{path}'" for path in session.search_dirs)
            raise InclusionError(
                f"could not find <{directive.target}> in any include directory. "
                f"Searched: {searched or 'no include directories are registered'}",
                filename, lineno, line, column)

        trialpaths = glslinclude.utils.ordered_unique([
            os.path.join(glslinclude.wrappedos.dirname(filename), directive.target),
            directive.target])
        for trialpath in trialpaths:
            if glslinclude.wrappedos.isfile(trialpath):
                return trialpath
        searched = ", ".join(f"'{path}'" for path in trialpaths)
        raise InclusionError(
            f'could not find "{directive.target}". Searched: {searched}',
            filename, lineno, line, column)

    def _include(self, directive, filename, lineno, line, session, output):
        includepath = self._resolve(directive, filename, lineno, line, session)
        if len(session.inclusion_chain) >= self.max_include_depth:
            raise InclusionError(
                f"#include nested more than {self.max_include_depth} levels deep. "
                "Is a file including itself without a guard?",
                filename, lineno, line, _indentation(line))

        if self.args.verbose >= 6:
            print(f"ShaderPreprocessor: {filename}:{lineno} includes {includepath}", file=sys.stderr)
        try:
            self._process_file(includepath, session, output)
        except PreprocessorError as err:
            err.add_inclusion(filename, lineno)
            raise
