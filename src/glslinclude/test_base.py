import os

import glslinclude.unittesthelper as uth
import glslinclude.preprocessor


class BaseGlslIncludeTestCase:
    """Base test case with common setup/teardown for glslinclude tests"""

    def setup_method(self):
        self._temp_context = uth.TempDirContext()
        self._tmpdir = self._temp_context.__enter__().tmpdir
        uth.reset()

    def teardown_method(self):
        if hasattr(self, '_temp_context'):
            self._temp_context.__exit__(None, None, None)
        uth.reset()

    def _write(self, sources):
        """Write {relative name: text} into the temp dir"""
        return uth.write_sources(self._tmpdir, sources)

    def _preprocessor(self, include_dirs=(), **overrides):
        args = glslinclude.preprocessor.default_args(**overrides)
        preprocessor = glslinclude.preprocessor.ShaderPreprocessor(args)
        for include_dir in include_dirs:
            preprocessor.add_include_directory(os.path.join(self._tmpdir, include_dir))
        return preprocessor

    def _process(self, filename, include_dirs=(), **overrides):
        return self._preprocessor(include_dirs, **overrides).process_unit(filename)

    def _flatten(self, filename, include_dirs=(), **overrides):
        return self._preprocessor(include_dirs, **overrides).flatten(filename)
