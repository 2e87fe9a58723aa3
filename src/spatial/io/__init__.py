"""IO utilities: coordinate text parser, XML serialization, config loader."""

from .parser import parse_item3d
from .xml_io import write_xml, read_xml, to_xml_string
from .config_loader import ConfigLoader, load_config

__all__ = [
    "parse_item3d",
    "write_xml",
    "read_xml",
    "to_xml_string",
    "ConfigLoader",
    "load_config",
]
