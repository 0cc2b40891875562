"""glsl-flatten: flatten shader sources named on the command line.

Each unit is flattened on its own ParseSession, several at once when --jobs
allows.  The results are printed in argument order or written into
--output-dir.  The first error is printed to stderr and main returns 1.
"""

import sys
import concurrent.futures

import rich.console
import rich.text

import glslinclude.apptools
import glslinclude.jobs
import glslinclude.preprocessor
import glslinclude.utils
import glslinclude.wrappedos
from glslinclude.diagnostics import PreprocessorError


def add_arguments(cap):
    glslinclude.preprocessor.add_arguments(cap)
    glslinclude.jobs.add_arguments(cap)
    cap.add("filename", nargs="+", help="Shader source file(s) to flatten")


def _report(err, console):
    console.print(rich.text.Text(str(err), style="bold red"), soft_wrap=True)


def flatten_all(preprocessor, filenames, parallel=1):
    """ Flatten each file on its own session.  Results are in the order given.
        If any unit fails, the failure of the earliest such unit in that
        order is raised once every submitted unit has finished.
    """
    if parallel <= 1 or len(filenames) <= 1:
        return [preprocessor.flatten(filename) for filename in filenames]

    with concurrent.futures.ThreadPoolExecutor(max_workers=parallel) as executor:
        futures = [executor.submit(preprocessor.flatten, filename) for filename in filenames]
        return [future.result() for future in futures]


def main(argv=None):
    cap = glslinclude.apptools.create_parser(
        "Flatten GLSL shaders by resolving #include, #pragma once and #ifndef guards",
        argv=argv)
    add_arguments(cap)
    args = glslinclude.apptools.parseargs(cap, argv)
    errconsole = rich.console.Console(stderr=True, highlight=False)

    preprocessor = glslinclude.preprocessor.ShaderPreprocessor(args)
    try:
        results = flatten_all(preprocessor, args.filename, args.parallel)
    except PreprocessorError as err:
        _report(err, errconsole)
        return 1

    for filename, text in zip(args.filename, results):
        if args.verbose >= 1 and not glslinclude.utils.isshader(filename):
            print(f"{filename} is not a recognised shader stage", file=sys.stderr)
        if args.output_dir:
            try:
                outpath = glslinclude.wrappedos.write_output(args.output_dir, filename, text)
            except OSError as err:
                _report(err, errconsole)
                return 1
            if args.verbose >= 1:
                print(f"Wrote {outpath}", file=sys.stderr)
            continue

        if len(args.filename) > 1:
            print("// " + filename)
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
