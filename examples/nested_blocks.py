# pip install -e .
import logging
import tempfile

from bulkline.core import BulkConfig, BulkPipeline, ConsoleSinkConfig, FileSinkConfig

logging.basicConfig(level=logging.DEBUG)

lines = ["cmd1", "cmd2", "cmd3", "{", "cmd4", "{", "cmd5", "}", "cmd6", "}", "cmd7"]

with tempfile.TemporaryDirectory() as out_dir:
    config = BulkConfig(
        3,
        sinks=[ConsoleSinkConfig(), FileSinkConfig(directory=out_dir)],
    )
    with BulkPipeline.from_config(config) as pipeline:
        for line in lines:
            pipeline.feed(line)

    # bulk: cmd1, cmd2, cmd3
    # bulk: cmd4, cmd5, cmd6
    # bulk: cmd7
