"""Groups a stream of commands into bulks and fans them out to sinks."""

__version__ = "0.1.0"

from .input import BlockInput, read_commands
from .pipeline import BulkPipeline, run_bulk
from .processor import BatchProcessor, DeliveryFailedError, ProcessorClosedError
from .schema import Command
from .sinks import (
    BULK_PREFIX,
    ConsoleSink,
    FileSink,
    Sink,
    SinkBus,
    create_console_sink,
    create_file_sink,
    format_bulk,
)
from .time_utils import epoch_seconds, utc_now
from .types import (
    DEFAULT_CLOSE_MARKER,
    DEFAULT_OPEN_MARKER,
    BulkConfig,
    BulkConfigError,
    ConsoleSinkConfig,
    FileSinkConfig,
    SinkConfig,
    parse_bulk_size,
)

__all__ = [
    "__version__",
    # pipeline
    "BulkPipeline",
    "run_bulk",
    # engine
    "BatchProcessor",
    "DeliveryFailedError",
    "ProcessorClosedError",
    # input
    "BlockInput",
    "read_commands",
    # schema
    "Command",
    # sinks
    "BULK_PREFIX",
    "ConsoleSink",
    "FileSink",
    "Sink",
    "SinkBus",
    "create_console_sink",
    "create_file_sink",
    "format_bulk",
    # types
    "BulkConfig",
    "BulkConfigError",
    "ConsoleSinkConfig",
    "DEFAULT_CLOSE_MARKER",
    "DEFAULT_OPEN_MARKER",
    "FileSinkConfig",
    "SinkConfig",
    "parse_bulk_size",
    # utils
    "epoch_seconds",
    "utc_now",
]
