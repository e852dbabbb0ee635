import io
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import List

import pytest

from bulkline.core import BatchProcessor, BlockInput, Command, Sink, read_commands, utc_now


class RecordingSink(Sink):
    def __init__(self) -> None:
        self.batches: List[List[str]] = []

    def write_batch(self, batch: Sequence[Command]) -> None:
        self.batches.append([c.text for c in batch])


def _run(bulk_size: int, lines: List[str]) -> tuple[List[List[str]], BlockInput]:
    sink = RecordingSink()
    processor = BatchProcessor(bulk_size, sinks=[sink])
    block_input = BlockInput(processor)
    with processor:
        for line in lines:
            block_input.process_line(line)
    return sink.batches, block_input


# ---------------------------------------------------------------------------
# Block routing
# ---------------------------------------------------------------------------


def test_plain_commands_batched_by_size() -> None:
    batches, _ = _run(3, ["a", "b", "c", "d", "e"])
    assert batches == [["a", "b", "c"], ["d", "e"]]


def test_block_overrides_bulk_size() -> None:
    batches, _ = _run(2, ["{", "a", "b", "c", "}", "d"])
    assert batches == [["a", "b", "c"], ["d"]]


@pytest.mark.parametrize("bulk_size", [1, 2, 3, 10])
def test_nested_blocks_form_one_batch(bulk_size: int) -> None:
    batches, block_input = _run(bulk_size, ["{", "a", "{", "b", "}", "c", "}"])
    assert batches == [["a", "b", "c"]]
    assert block_input.block_depth == 0


def test_open_marker_flushes_pending_commands() -> None:
    batches, _ = _run(5, ["x", "y", "{", "a", "}"])
    assert batches == [["x", "y"], ["a"]]


def test_unbalanced_close_is_ignored() -> None:
    batches, block_input = _run(2, ["}", "a", "b", "c"])
    assert batches == [["a", "b"], ["c"]]
    assert block_input.block_depth == 0


def test_unbalanced_close_does_not_flush() -> None:
    sink = RecordingSink()
    processor = BatchProcessor(3, sinks=[sink])
    block_input = BlockInput(processor)
    block_input.process_line("a")
    block_input.process_line("}")

    assert sink.batches == []
    assert block_input.block_depth == 0
    assert processor.block_forced is False


def test_unterminated_block_is_discarded() -> None:
    batches, block_input = _run(2, ["a", "{", "b", "c", "d"])
    assert batches == [["a"]]
    assert block_input.block_depth == 1


def test_markers_never_reach_the_batch() -> None:
    batches, _ = _run(10, ["a", "{", "{", "}", "b", "}", "c"])
    flat = [t for batch in batches for t in batch]
    assert "{" not in flat and "}" not in flat


def test_engine_sees_single_enter_exit_pair() -> None:
    calls: List[str] = []

    class Spy(BatchProcessor):
        def enter_forced_block(self) -> None:
            calls.append("enter")
            super().enter_forced_block()

        def exit_forced_block(self) -> None:
            calls.append("exit")
            super().exit_forced_block()

    block_input = BlockInput(Spy(3))
    for line in ["{", "{", "{", "a", "}", "}", "}"]:
        block_input.process_line(line)

    assert calls == ["enter", "exit"]


def test_custom_markers() -> None:
    sink = RecordingSink()
    processor = BatchProcessor(1, sinks=[sink])
    block_input = BlockInput(processor, open_marker="BEGIN", close_marker="END")
    for line in ["BEGIN", "a", "{", "b", "END"]:
        block_input.process_line(line)

    assert sink.batches == [["a", "{", "b"]]


# ---------------------------------------------------------------------------
# Line reading
# ---------------------------------------------------------------------------


def test_read_commands_strips_newlines_and_stamps() -> None:
    stamp = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    commands = list(read_commands(io.StringIO("a\nb\r\n\nc"), clock=lambda: stamp))

    assert [c.text for c in commands] == ["a", "b", "", "c"]
    assert all(c.timestamp == stamp for c in commands)


def test_run_counts_lines() -> None:
    sink = RecordingSink()
    processor = BatchProcessor(2, sinks=[sink])
    block_input = BlockInput(processor)

    assert block_input.run(io.StringIO("a\n{\nb\n}\n")) == 4
    assert sink.batches == [["a"], ["b"]]


def test_process_line_stamps_with_current_time() -> None:
    seen: List[Command] = []

    class Keeper(Sink):
        def write_batch(self, batch: Sequence[Command]) -> None:
            seen.extend(batch)

    block_input = BlockInput(BatchProcessor(1, sinks=[Keeper()]))
    before = utc_now()
    block_input.process_line("a")
    after = utc_now()

    assert seen[0].text == "a"
    assert before <= seen[0].timestamp <= after
