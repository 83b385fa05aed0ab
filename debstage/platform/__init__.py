"""Platform abstraction layer."""

from .files import atomic_write_text, copy_with_mode
from .process import CommandRunner, DefaultCommandRunner, ProcessError

__all__ = [
    # files
    "atomic_write_text",
    "copy_with_mode",
    # process
    "CommandRunner",
    "DefaultCommandRunner",
    "ProcessError",
]
