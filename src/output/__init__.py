"""Output sinks."""

from src.output.sink import JsonLinesSink, MemorySink, OutputSink

__all__ = [
    "OutputSink",
    "JsonLinesSink",
    "MemorySink",
]
