import os
import platform

import psutil


def _cpus_linux():
    thisprocess = psutil.Process()
    return len(thisprocess.cpu_affinity())


def _cpus_default():
    # cpu_affinity isn't available on Darwin
    return psutil.cpu_count() or os.cpu_count() or 1


def _cpu_count():
    if platform.system() == "Linux":
        try:
            return _cpus_linux()
        except (psutil.Error, OSError):
            # Termux and some containers don't let us see /proc
            pass
    return _cpus_default()


def add_arguments(cap):
    cap.add(
        "-j",
        "--jobs",
        "--parallel",
        dest="parallel",
        type=int,
        default=_cpu_count(),
        help="Sets the number of units to flatten in parallel.",
    )
