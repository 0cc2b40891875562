import argparse
import os
import shutil
import sys
from io import open

import configargparse
import rich.console
from rich_rst import RestructuredText

from glslinclude.version import __version__
import glslinclude.configutils
import glslinclude.utils


def manualpath():
    """ The reStructuredText manual that ships with the package """
    return os.path.join(
        os.path.dirname(os.path.realpath(__file__)), "README.glslinclude-doc.rst")


def print_manual(console=None):
    if console is None:
        console = rich.console.Console()
    with open(manualpath(), encoding="utf-8") as ff:
        console.print(RestructuredText(ff.read()))


class ManAction(argparse.Action):
    """ --man renders the manual then exits, in the way --version does """

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(
            option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        print_manual()
        parser.exit()


def create_parser(description, argv=None, include_config=True):
    """ Create (or fetch) the configargparse singleton.
        Config files are only looked for when include_config is True.
    """
    config_files = []
    if include_config:
        config_files = glslinclude.configutils.defaultconfigs()

    try:
        cap = configargparse.getArgumentParser(
            description=description,
            formatter_class=configargparse.ArgumentDefaultsHelpFormatter,
            default_config_files=config_files,
            args_for_setting_config_path=["-c", "--config"],
            ignore_unknown_config_file_keys=True,
        )
    except ValueError:
        # The singleton was already created by an earlier call
        cap = configargparse.getArgumentParser()
    return cap


def add_base_arguments(cap):
    cap.add(
        "-v",
        "--verbose",
        help="Output verbosity. Add more v's to make it more verbose",
        action="count",
        default=0)
    cap.add(
        "-q",
        "--quiet",
        help="Decrement verbosity. Useful in apps where the default verbosity > 0.",
        action="count",
        default=0)
    cap.add(
        "--version",
        action="version",
        version=__version__)
    cap.add(
        "--man",
        action=ManAction,
        help="Show the manual and exit")
    cap.add(
        "-?",
        action='help',
        help='Help')


def add_common_arguments(cap):
    """ Insert common arguments into the configargparse object """
    add_base_arguments(cap)
    cap.add(
        "-I",
        "--include",
        action="append",
        default=None,
        help="Directory to search for #include <name> files. "
             "Repeat to add more. Directories are searched in the order given.")
    cap.add(
        "--output-dir",
        dest="output_dir",
        env_var="GLSLINCLUDE_OUTPUT_DIR",
        default=None,
        help="Write the flattened source of each unit into this directory "
             "instead of printing it")


def _commonsubstitutions(args):
    """ Fix up the arguments that are awkward to express in configargparse """
    args.verbose -= args.quiet

    if hasattr(args, "include"):
        args.include = [
            glslinclude.utils.normalize_directory(path)
            for path in (args.include or [])
            if path]


# List to store the callback functions for parse args
_substitutioncallbacks = [_commonsubstitutions]


def resetcallbacks():
    """ Useful in tests to clear out the substitution callbacks """
    global _substitutioncallbacks
    _substitutioncallbacks = [_commonsubstitutions]


def registercallback(callback):
    """ Use this to register a function to be called back during the
        substitutions call (usually during parseargs).
        The callback function will later be given "args" as its argument.
    """
    _substitutioncallbacks.append(callback)


def substitutions(args, verbose=None):
    if verbose is None:
        verbose = args.verbose

    for func in _substitutioncallbacks:
        func(args)

    if verbose >= 3:
        verbose_print_args(args)


def parseargs(cap, argv=None, verbose=None):
    args = cap.parse_args(args=argv)

    if verbose is None:
        verbose = args.verbose

    substitutions(args, verbose)
    return args


def verbose_print_args(args, stream=None):
    """ Print the args in two columns Attr: Value """
    if stream is None:
        stream = sys.stderr
    print("\nFinal aggregated variables:", file=stream)
    maxattrlen = max((len(attr) for attr in vars(args)), default=0)
    fmt = "".join(["{0:", str(maxattrlen + 1), "}: {1}"])
    maxcols = shutil.get_terminal_size().columns
    if maxcols <= maxattrlen + 3:
        print("Verbose print of args aborted due to small terminal size!", file=stream)
        return

    for attr, value in sorted(vars(args).items()):
        print(fmt.format(attr, "" if value is None else value), file=stream)
