import os
import functools

# Extension (without the dot) to the kind of shader stage it holds
SHADER_KINDS = {
    "vert": "VERTEX",
    "frag": "FRAGMENT",
    "geom": "GEOMETRY",
    "tesc": "TESS_CONTROL",
    "tese": "TESS_EVALUATION",
    "comp": "COMPUTE",
}


def extension(filename):
    """ The extension of filename without the dot. Empty if there is none. """
    return os.path.splitext(filename)[1][1:]


@functools.lru_cache(maxsize=None)
def shaderkind(filename):
    """ The shader kind implied by the extension of filename, or None """
    return SHADER_KINDS.get(extension(filename))


def isshader(filename):
    """ Is filename a shader stage that can be handed to a compiler? """
    return shaderkind(filename) is not None


def clear_cache():
    shaderkind.cache_clear()


def normalize_directory(path):
    """ Use forward slashes and guarantee a trailing slash so that an
        include name can simply be appended.
    """
    normalized = path.replace("\\", "/")
    if not normalized.endswith("/"):
        normalized += "/"
    return normalized


def add_flag_argument(parser, name, dest=None, default=False, help=None):
    """ Add a flag argument to an ArgumentParser instance.
        Either the --flag is present or the --no-flag is present.
    """
    if not dest:
        dest = name
    group = parser.add_mutually_exclusive_group()
    bool_help = help + " Use --no-" + name + " to turn the feature off."
    group.add_argument(
        "--" + name, dest=dest, default=default, action="store_true", help=bool_help
    )
    group.add_argument(
        "--no-" + name, dest=dest, action="store_false", default=not default
    )


def ordered_unique(iterable):
    """Return unique items from iterable preserving insertion order."""
    return list(dict.fromkeys(iterable))
