"""Utility functions for filesystem operations."""

import re


def sanitize_path_component(component: str) -> str:
    """
    Sanitize a string for use as a filesystem path component.

    Replaces unsafe characters with underscores. Figma node ids contain
    ``:`` and ``;`` which several filesystems reject.

    Example:
        >>> sanitize_path_component("12:34")
        '12_34'
        >>> sanitize_path_component("I1:2;3:4")
        'I1_2_3_4'
        >>> sanitize_path_component("hero-image.png")
        'hero-image.png'
    """
    return re.sub(r"[^a-zA-Z0-9._-]", "_", component)
