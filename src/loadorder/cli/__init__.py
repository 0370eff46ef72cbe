"""
loadorder CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (packages/, ...).
"""
from ._args import add_deprecated_flag, add_json_flag, add_root_arg
from ._output import OutputFormatter

__all__ = [
    "OutputFormatter",
    "add_deprecated_flag",
    "add_json_flag",
    "add_root_arg",
]
