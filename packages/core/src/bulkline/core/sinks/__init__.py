from .bus import SinkBus
from .console import ConsoleSink, create_console_sink
from .file import FileSink, create_file_sink
from .types import BULK_PREFIX, Sink, format_bulk

__all__ = [
    "BULK_PREFIX",
    "ConsoleSink",
    "FileSink",
    "Sink",
    "SinkBus",
    "create_console_sink",
    "create_file_sink",
    "format_bulk",
]
