""" Wrap and cache a variety of os calls """
import os
import functools
from io import open


@functools.lru_cache(maxsize=None)
def isfile(trialpath):
    """ Cached version of os.path.isfile """
    return os.path.isfile(trialpath)


@functools.lru_cache(maxsize=None)
def realpath(trialpath):
    """ Cache os.path.realpath """
    # Note: We can't raise an exception on file non-existence
    # because this is sometimes called in order to create the file.
    return os.path.realpath(trialpath)


@functools.lru_cache(maxsize=None)
def dirname(trialpath):
    """ A cached verion of os.path.dirname """
    return os.path.dirname(trialpath)


def clear_cache():
    isfile.cache_clear()
    realpath.cache_clear()
    dirname.cache_clear()


def assetname(filepath):
    """ The filename part of filepath.  Both windows and linux style
        slashes are treated as separators, whatever the host platform.
    """
    position = max(filepath.rfind("\\"), filepath.rfind("/"))
    return filepath[position + 1:]


def makedirs(path):
    """ Create path (and any parents) if it is not already a directory """
    if os.path.exists(path) and not os.path.isdir(path):
        raise NotADirectoryError(
            "Output directory {0} exists but is not a directory".format(path))
    os.makedirs(path, exist_ok=True)


def write_output(output_dir, unit_path, text):
    """ Write the flattened text of unit_path into output_dir.
        The written file takes the base name of the unit.
        Returns the path that was written.
    """
    makedirs(output_dir)
    outpath = os.path.join(output_dir, assetname(unit_path))
    with open(outpath, "w", encoding="utf-8", newline="\n") as ff:
        ff.write(text)
    return outpath
