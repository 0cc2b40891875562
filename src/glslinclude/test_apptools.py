import argparse
import io
import os

import pytest

import glslinclude.apptools
import glslinclude.preprocessor
import glslinclude.unittesthelper as uth
import glslinclude.version


def _parse(argv):
    cap = glslinclude.apptools.create_parser("test", argv=argv, include_config=False)
    glslinclude.preprocessor.add_arguments(cap)
    return glslinclude.apptools.parseargs(cap, argv)


class TestParseArgs:
    def setup_method(self):
        uth.reset()

    def teardown_method(self):
        uth.reset()

    def test_defaults(self):
        args = _parse([])
        assert args.verbose == 0
        assert args.include == []
        assert args.output_dir is None
        assert args.max_include_depth == glslinclude.preprocessor.DEFAULT_MAX_INCLUDE_DEPTH
        assert args.strip_trailing_newline is False

    def test_quiet_subtracts_from_verbose(self):
        args = _parse(["-vvv", "-q"])
        assert args.verbose == 2

    def test_include_directories_are_normalized_in_order(self):
        args = _parse(["-I", "b", "--include", "a\\c", "-I", "d/"])
        assert args.include == ["b/", "a/c/", "d/"]

    def test_strip_trailing_newline_flag(self):
        assert _parse(["--strip-trailing-newline"]).strip_trailing_newline is True
        uth.reset()
        assert _parse(["--no-strip-trailing-newline"]).strip_trailing_newline is False

    def test_max_include_depth(self):
        assert _parse(["--max-include-depth", "3"]).max_include_depth == 3

    def test_registered_callback_runs(self):
        seen = []
        glslinclude.apptools.registercallback(lambda args: seen.append(args.verbose))
        _parse(["-v"])
        assert seen == [1]
        glslinclude.apptools.resetcallbacks()
        uth.delete_existing_parsers()
        _parse(["-v"])
        assert seen == [1]

    def test_create_parser_returns_singleton(self):
        first = glslinclude.apptools.create_parser("first", include_config=False)
        second = glslinclude.apptools.create_parser("second", include_config=False)
        assert first is second

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            _parse(["--version"])
        assert excinfo.value.code == 0
        assert glslinclude.version.__version__ in capsys.readouterr().out


class TestConfigHierarchy:
    def setup_method(self):
        uth.reset()

    def teardown_method(self):
        uth.reset()

    def _parse_with_config(self, argv):
        cap = glslinclude.apptools.create_parser("test", argv=argv)
        glslinclude.preprocessor.add_arguments(cap)
        return glslinclude.apptools.parseargs(cap, argv)

    def test_config_file_in_working_directory(self):
        with uth.TempDirContext() as ctx:
            uth.create_temp_config(ctx.tmpdir, ["max-include-depth = 5", "include = [lib, shaders/include]"])
            args = self._parse_with_config([])
            assert args.max_include_depth == 5
            assert args.include == ["lib/", "shaders/include/"]

    def test_command_line_overrides_config(self):
        with uth.TempDirContext() as ctx:
            uth.create_temp_config(ctx.tmpdir, ["max-include-depth = 5"])
            args = self._parse_with_config(["--max-include-depth", "9"])
            assert args.max_include_depth == 9

    def test_environment_overrides_config(self, monkeypatch):
        with uth.TempDirContext() as ctx:
            uth.create_temp_config(ctx.tmpdir, ["output-dir = fromconfig"])
            monkeypatch.setenv("GLSLINCLUDE_OUTPUT_DIR", "fromenv")
            args = self._parse_with_config([])
            assert args.output_dir == "fromenv"

    def test_explicit_config(self):
        with uth.TempDirContext() as ctx:
            os.makedirs("conf")
            cfg = uth.create_temp_config(os.path.join(ctx.tmpdir, "conf"), ["strip-trailing-newline = true"])
            args = self._parse_with_config(["-c", cfg])
            assert args.strip_trailing_newline is True


class TestVerbosePrintArgs:
    def test_two_columns(self):
        args = argparse.Namespace(include=["a/"], verbose=3, output_dir=None)
        stream = io.StringIO()
        glslinclude.apptools.verbose_print_args(args, stream=stream)
        lines = stream.getvalue().splitlines()
        assert "Final aggregated variables:" in lines
        assert "include    : ['a/']" in lines
        assert "output_dir : " in lines
        assert "verbose    : 3" in lines


class TestManual:
    def test_manual_ships_with_package(self):
        assert os.path.isfile(glslinclude.apptools.manualpath())

    def test_man_prints_and_exits(self, capsys):
        uth.reset()
        with pytest.raises(SystemExit) as excinfo:
            _parse(["--man"])
        assert excinfo.value.code == 0
        assert "glsl-flatten" in capsys.readouterr().out
        uth.reset()
