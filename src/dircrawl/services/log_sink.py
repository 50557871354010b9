"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/log_sink.py
Record sink writing a run's output as delimited text files suitable for relational import:

- dir.log   -- directory ids, parent ids, levels, times and names
- file.log  -- file ids, owning directory ids, times, sizes, fingerprints and names
- error.log -- one line per error or cycle hit
- crawl.log -- roots, timing and summary statistics
"""
import os
import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence, TextIO, Tuple

from dircrawl.core.models import (
    DigestAlgorithm,
    DirectoryNode,
    ErrorKind,
    FileNode,
    Metric,
    RunStatistics,
)
from dircrawl.core.interfaces import RecordSink
from dircrawl.services.run_directory import RunDirectory
from dircrawl.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

NA = "NA"

# Line-break and tab characters in names are written escaped so each record stays one row
_CONTROL_ESCAPES = str.maketrans({"\t": "\\t", "\n": "\\n", "\r": "\\r"})


def escape_field(text: str) -> str:
    return text.translate(_CONTROL_ESCAPES)


# (header, alignment, width); width None means unpadded
FieldSpec = Tuple[str, str, Optional[int]]

DIR_FIELDS: List[FieldSpec] = [
    ("DirId", "<", 7),
    ("ParId", "<", 7),
    ("Level", "<", 5),
    ("FirstWrite", "<", 13),
    ("LastWrite", "<", 13),
    ("LastRead", "<", 13),
    ("DirName", "<", None),
]


def file_fields(algorithm: DigestAlgorithm) -> List[FieldSpec]:
    return [
        ("FileId", "<", 7),
        ("DirId", "<", 7),
        ("FirstWrite", "<", 13),
        ("LastWrite", "<", 13),
        ("LastRead", "<", 13),
        ("FileSize", ">", 12),
        ("FileSum", "<", algorithm.hex_length),
        ("FileName", "<", None),
    ]


class RecordFormatter:
    """Joins field values with a separator, optionally padding them to fixed widths."""

    def __init__(self, fields: Sequence[FieldSpec], separator: str = "\t", justify: bool = True):
        self.fields = list(fields)
        self.separator = separator
        self.justify = justify

    def header(self) -> str:
        return self.format([name for name, _, _ in self.fields])

    def format(self, values: Sequence[object]) -> str:
        if len(values) != len(self.fields):
            raise ValueError(f"Expected {len(self.fields)} fields, got {len(values)}")
        parts = []
        for value, (_, align, width) in zip(values, self.fields):
            text = str(value)
            if self.justify and width is not None:
                text = f"{text:{align}{width}}"
            parts.append(text)
        return self.separator.join(parts)


class LogFileSink(RecordSink):
    """
    Writes records into the four log files of a run folder.
    Files are opened in append mode and closed by `close()` (or the context manager).
    """

    DIR_LOG = "dir.log"
    FILE_LOG = "file.log"
    ERROR_LOG = "error.log"
    CRAWL_LOG = "crawl.log"

    def __init__(
            self,
            run_directory: RunDirectory,
            algorithm: DigestAlgorithm = DigestAlgorithm.MD5,
            tab_separated: bool = True,
            justify_fields: bool = True,
            echo: Optional[Callable[[str], None]] = None
    ):
        separator = "\t" if tab_separated else " "
        self.run_directory = run_directory
        self.dir_format = RecordFormatter(DIR_FIELDS, separator, justify_fields)
        self.file_format = RecordFormatter(file_fields(algorithm), separator, justify_fields)
        self.echo = echo
        self._streams: List[TextIO] = []
        self._open()

    def _open(self) -> None:
        try:
            self.dir_log = self._append(self.DIR_LOG)
            self.file_log = self._append(self.FILE_LOG)
            self.error_log = self._append(self.ERROR_LOG)
            self.crawl_log = self._append(self.CRAWL_LOG)
        except OSError as e:
            self.close()
            raise RuntimeError(f"Could not open log files in {self.run_directory.path}: {e}") from e

        self.dir_log.write(self.dir_format.header() + "\n")
        self.file_log.write(self.file_format.header() + "\n")

    def _append(self, name: str) -> TextIO:
        # surrogateescape writes undecodable filename bytes back out unchanged
        stream = open(self.run_directory.file_path(name), "a", encoding="utf-8",
                      errors="surrogateescape", newline="\n")
        self._streams.append(stream)
        return stream

    def __enter__(self) -> "LogFileSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Flush and close every open log file."""
        streams, self._streams = self._streams, []
        for stream in streams:
            stream.close()

    # ===== Run header =====

    def log_start(self, roots: Sequence[str], started_at: datetime) -> None:
        """Lists every root with its ordinal; roots that are not directories are marked with *."""
        for index, root in enumerate(roots, 1):
            valid = os.path.isdir(root)
            path = os.path.abspath(root) if valid else root
            marker = "" if valid else "*"
            self.crawl_log.write(f"dircrawl root path {index}: {marker}{escape_field(path)}\n")
        self._tee(f"dircrawl start  time: {ConvertUtils.datetime_to_stamp(started_at)}")

    # ===== RecordSink =====

    def emit_directory(self, node: DirectoryNode) -> None:
        if node.degraded:
            # Full path, since the name could not be read back from the directory itself
            values = [node.id, node.parent_id, node.depth, NA, NA, NA, escape_field(node.path)]
        else:
            values = [
                node.id,
                node.parent_id,
                node.depth,
                ConvertUtils.datetime_to_stamp(node.created_at, NA),
                ConvertUtils.datetime_to_stamp(node.modified_at, NA),
                ConvertUtils.datetime_to_stamp(node.accessed_at, NA),
                escape_field(node.name),
            ]
        self.dir_log.write(self.dir_format.format(values) + "\n")

    def emit_file(self, node: FileNode) -> None:
        if node.degraded:
            values = [node.id, node.owner_directory_id, NA, NA, NA, NA, NA, escape_field(node.name)]
        else:
            values = [
                node.id,
                node.owner_directory_id,
                ConvertUtils.datetime_to_stamp(node.created_at, NA),
                ConvertUtils.datetime_to_stamp(node.modified_at, NA),
                ConvertUtils.datetime_to_stamp(node.accessed_at, NA),
                node.size,
                node.fingerprint or NA,
                escape_field(node.name),
            ]
        self.file_log.write(self.file_format.format(values) + "\n")

    def emit_error(self, kind: ErrorKind, context: str, message: str) -> None:
        self.error_log.write(f">> {kind.value}: {escape_field(context)}: {escape_field(message)}\n")

    def emit_summary(self, stats: RunStatistics) -> None:
        seconds, minutes, hours, days = ConvertUtils.elapsed_breakdown(stats.elapsed_seconds)
        self._tee(f"dircrawl end    time: {ConvertUtils.datetime_to_stamp(stats.finished_at)}")
        self._tee(f"dircrawl elapsed sec: {seconds}")
        self._tee(f"dircrawl elapsed min: {minutes}")
        self._tee(f"dircrawl elapsed  hr: {hours}")
        self._tee(f"dircrawl elapsed day: {days}")

        for metric in Metric.get_all():
            line = f"{metric.value:<20}: {stats[metric]}"
            # Alternate units on the same line for total bytes and processing rate
            if metric is Metric.BYTES_PROCESSED:
                line += ConvertUtils.metric_equivalencies(stats[metric])
            elif metric is Metric.PROCESSING_SPEED:
                line = f"{metric.value:<20}: {stats.throughput}" + ConvertUtils.metric_equivalencies(stats.throughput)
            self._tee(line)

        for stream in self._streams:
            stream.flush()

    def _tee(self, line: str) -> None:
        """Write a line to crawl.log and echo it to the console."""
        self.crawl_log.write(line + "\n")
        if self.echo:
            self.echo(line)
