import os
import appdirs

import glslinclude.utils

CONFIG_NAME = "glslinclude.conf"


def default_config_directories(user_config_dir=None, system_config_dir=None, verbose=0):
    # Use configuration in the order (lowest to highest priority)
    # 1) system config (XDG compliant.  /etc/xdg/glslinclude)
    # 2) user config   (XDG compliant. ~/.config/glslinclude)
    # 3) current working directory
    # 4) environment variables
    # 5) given on the command line

    # These variables are settable to assist writing tests
    if user_config_dir is None:
        user_config_dir = appdirs.user_config_dir(appname="glslinclude")
    if system_config_dir is None:
        system_config_dir = appdirs.site_config_dir(appname="glslinclude")

    results = glslinclude.utils.ordered_unique(
        [system_config_dir, user_config_dir, os.getcwd()]
    )
    if verbose >= 9:
        print(" ".join(["Default config directories"] + list(results)))

    return results


def defaultconfigs(user_config_dir=None, system_config_dir=None, verbose=0):
    """ Find the glslinclude.conf files, lowest priority first """
    candidates = [
        os.path.join(defaultdir, CONFIG_NAME)
        for defaultdir in default_config_directories(
            user_config_dir=user_config_dir,
            system_config_dir=system_config_dir,
            verbose=verbose,
        )
    ]

    # Only return the configs that exist
    configs = [cfg for cfg in candidates if os.path.isfile(cfg)]
    if verbose >= 8:
        print(" ".join(["Default configs are "] + configs))
    return configs
