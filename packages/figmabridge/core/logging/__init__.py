"""Debug payload dumps for figmabridge.

Example:
    >>> from figmabridge.core.logging import YAMLPayloadDumper
    >>> await YAMLPayloadDumper("logs").dump("figma-raw.yml", payload)
"""

from .protocol import PayloadDumper
from .yaml_dumper import NullPayloadDumper, YAMLPayloadDumper, to_plain

__all__ = ["PayloadDumper", "YAMLPayloadDumper", "NullPayloadDumper", "to_plain"]
