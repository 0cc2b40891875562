"""Hand flattened shader components to a compiler.

Compiling and linking are left to a caller-supplied callable so that this
package has no dependency on any graphics API.  The callable is given the
shader name and the dictionary returned by Shader.sources() and whatever it
returns is kept as the program.
"""

import os
import sys
from dataclasses import dataclass

import glslinclude.utils
import glslinclude.wrappedos
from glslinclude.preprocessor import ShaderPreprocessor


class UnsupportedShaderError(ValueError):
    """The kind of a shader component could not be inferred from its extension."""


@dataclass(frozen=True)
class ShaderSource:
    path: str
    kind: str
    source: str


def infer_kind(path):
    ext = glslinclude.utils.extension(path)
    if not ext:
        raise UnsupportedShaderError(f'Could not find shader extension on file: "{path}"')
    kind = glslinclude.utils.shaderkind(path)
    if kind is None:
        raise UnsupportedShaderError(f'Unknown or unsupported shader of type: "{ext}"')
    return kind


class Shader:
    """ A named shader program made of one file per stage """

    def __init__(self, name, component_paths, preprocessor=None, compiler=None, output_dir=None):
        self.name = name
        self.component_paths = list(component_paths)
        self.preprocessor = preprocessor if preprocessor is not None else ShaderPreprocessor()
        self.compiler = compiler
        self.output_dir = output_dir
        self.program = None

    def sources(self):
        """ Map each component path to its ShaderSource.
            Kinds are checked before anything is flattened.
        """
        kinds = {path: infer_kind(path) for path in self.component_paths}
        return {
            path: ShaderSource(path=path, kind=kind, source=self.preprocessor.flatten(path))
            for path, kind in kinds.items()
        }

    def compile(self):
        sources = self.sources()
        if self.output_dir:
            for shadersource in sources.values():
                outpath = glslinclude.wrappedos.write_output(
                    self.output_dir, shadersource.path, shadersource.source)
                if self.preprocessor.args.verbose >= 2:
                    print(f"Shader {self.name}: wrote {outpath}", file=sys.stderr)

        if self.compiler is not None:
            self.program = self.compiler(self.name, sources)
        return sources

    def recompile(self):
        """ Pick up edits made to the component files (or their includes) on disk """
        glslinclude.wrappedos.clear_cache()
        return self.compile()

    def __repr__(self):
        components = ", ".join(os.path.basename(path) for path in self.component_paths)
        return f"Shader({self.name!r}: {components})"
