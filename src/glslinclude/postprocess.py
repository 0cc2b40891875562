"""Condense flattened output before it is handed to a shader compiler."""

import re

_NEWLINE_RUN_RE = re.compile(r"\n{2,}")


def collapse_newlines(text, strip_leading=True, strip_trailing=False):
    """Collapse every run of two or more newlines into a single newline.

    Leading newlines are removed unless strip_leading is False.  When
    strip_trailing is True the (single) trailing newline is removed too.
    Only newline characters are touched.
    """
    text = _NEWLINE_RUN_RE.sub("\n", text)
    if strip_leading:
        text = text.lstrip("\n")
    if strip_trailing and text.endswith("\n"):
        text = text[:-1]
    return text
