import configargparse
import os
import shutil
import tempfile
import textwrap
from io import open

import glslinclude.apptools
import glslinclude.utils
import glslinclude.wrappedos

# The abbreviation "uth" is often used for this "unittesthelper"


def reset():
    delete_existing_parsers()
    glslinclude.apptools.resetcallbacks()
    glslinclude.wrappedos.clear_cache()
    glslinclude.utils.clear_cache()


def delete_existing_parsers():
    """The singleton parsers supplied by configargparse
    don't play well with the unittest framework.
    This function will delete them so you are
    starting with a clean slate
    """
    configargparse._parsers = {}


def packagedir():
    return os.path.dirname(os.path.realpath(__file__))


def samplesdir():
    return os.path.realpath(os.path.join(packagedir(), "samples"))


def write_sources(directory, sources):
    """Write each {relative name: text} into directory.
    The text is dedented so tests can use indented triple quoted strings.
    Returns {relative name: path written}.
    """
    written = {}
    for name, text in sources.items():
        path = os.path.join(directory, name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as ff:
            ff.write(textwrap.dedent(text))
        written[name] = path
    return written


def create_temp_config(tempdir, extralines=()):
    """User is responsible for removing the config file when
    they are finished
    """
    filename = os.path.join(tempdir, "glslinclude.conf")
    with open(filename, "w") as ff:
        for line in extralines:
            ff.write(line + "\n")
    return filename


class TempDirContext:
    """chdir into a fresh temporary directory for the duration of the context"""

    def __enter__(self):
        self._origdir = os.getcwd()
        self.tmpdir = os.path.realpath(tempfile.mkdtemp())
        os.chdir(self.tmpdir)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        os.chdir(self._origdir)
        shutil.rmtree(self.tmpdir, ignore_errors=True)
