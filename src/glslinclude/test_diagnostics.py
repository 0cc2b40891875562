from glslinclude.diagnostics import (
    InclusionError,
    PreprocessorError,
    StructuralMismatchError,
    format_diagnostic,
)


class TestFormatDiagnostic:
    def test_three_line_report(self):
        report = format_diagnostic("a.glsl", "#endif\n", 7, "#endif without matching #ifndef")
        assert report.splitlines() == [
            "In file 'a.glsl' on line 7: error: #endif without matching #ifndef",
            "    7 | #endif",
            "      | ^",
        ]

    def test_caret_column(self):
        report = format_diagnostic("a.glsl", "#ifndef FOO\n", 3, "unterminated #ifndef FOO", column=8)
        assert report.splitlines()[2] == "      | " + " " * 8 + "^"

    def test_caret_reuses_tabs(self):
        report = format_diagnostic("a.glsl", "\t\t#endif\n", 1, "oops", column=2)
        assert report.splitlines()[2] == "      | \t\t^"

    def test_column_is_clamped(self):
        report = format_diagnostic("a.glsl", "abc", 1, "oops", column=99)
        assert report.splitlines()[2] == "      | " + " " * 3 + "^"

    def test_large_line_numbers_widen_gutter(self):
        report = format_diagnostic("a.glsl", "x", 123456, "oops")
        assert report.splitlines()[1] == "123456 | x"
        assert report.splitlines()[2] == " " * 7 + "| ^"

    def test_header_only_without_line(self):
        assert format_diagnostic("a.glsl", None, 0, "could not open") == \
            "In file 'a.glsl' on line 0: error: could not open"


class TestPreprocessorError:
    def test_str_is_report(self):
        err = StructuralMismatchError("#endif without matching #ifndef", "a.glsl", 2, "#endif\n")
        assert str(err) == err.report
        assert err.report.startswith("In file 'a.glsl' on line 2")
        assert isinstance(err, PreprocessorError)
        assert err.kind == "structural mismatch"

    def test_add_inclusion_builds_trail(self):
        err = InclusionError("could not find <x.glsl>", "b.glsl", 4, "#include <x.glsl>\n", 9)
        err.add_inclusion("a.glsl", 3)
        err.add_inclusion("main.frag", 1)
        lines = str(err).splitlines()
        assert lines[-2:] == [
            "    included from: 'a.glsl', line 3",
            "    included from: 'main.frag', line 1",
        ]
        assert err.trail == [("a.glsl", 3), ("main.frag", 1)]
        assert err.args == (err.report,)
