"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/action_log.py
Append-only audit log of every decision made during a run.

The file is opened once per run and never reopened. Each record is written as one
whole line and flushed immediately, so an interrupted run still leaves a readable
partial log.
"""
import logging
from pathlib import Path
from typing import Optional, Sequence, TextIO, Tuple

from dupescope.core.models import DecisionKind, DeletionDecision, HashAlgorithmType
from dupescope.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

SEPARATOR = "-------------------"


class ActionLog:
    """
    Writes the plain-text log:

        Kept <path> (Hash: <fp>, Duplicates: <a>, <b>)
        Deleted <path> (Hash: <fp>, Duplicates: ...)
        DRY run: Would delete <path> (Hash: <fp>, Duplicates: ...)
        Skipped <path> (Hash: <fp>, Duplicates: ...)
        Failed to delete <path> - <cause>
    """

    def __init__(self, path: str, stream: TextIO):
        self.path = path
        self._stream: Optional[TextIO] = stream

    @classmethod
    def create(
            cls,
            log_dir: str,
            algorithm: HashAlgorithmType,
            directories: Sequence[str],
            timestamp: Optional[str] = None
    ) -> "ActionLog":
        """
        Creates log_<timestamp>.txt in log_dir and writes the header.
        An existing log is never overwritten: a second run within the same second
        gets log_<timestamp>_1.txt, then _2, and so on.
        """
        timestamp = timestamp or ConvertUtils.timestamp_to_human()
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)

        log_path, stream = cls._open_new(directory, timestamp)
        log = cls(str(log_path), stream)
        log._write_header(timestamp, algorithm, directories)
        logger.debug(f"Action log created: {log_path}")
        return log

    @staticmethod
    def _open_new(directory: Path, timestamp: str) -> Tuple[Path, TextIO]:
        suffix = 0
        while True:
            name = f"log_{timestamp}.txt" if suffix == 0 else f"log_{timestamp}_{suffix}.txt"
            log_path = directory / name
            try:
                return log_path, open(log_path, "x", encoding="utf-8")
            except FileExistsError:
                logger.debug(f"Log file already exists: {log_path}")
                suffix += 1

    def _write_header(self, timestamp: str, algorithm: HashAlgorithmType, directories: Sequence[str]) -> None:
        lines = [
            "Log for the duplicate deletion script",
            f"Date: {timestamp}",
            f"Using algorithm: {algorithm.display_name}",
            "Directories:",
        ]
        lines.extend(f"- {d}" for d in directories)
        lines.append(SEPARATOR)
        for line in lines:
            self._write_line(line)

    @staticmethod
    def format_decision(decision: DeletionDecision) -> str:
        """Renders one decision as a single log line."""
        if decision.kind == DecisionKind.FAILED:
            return f"Failed to delete {decision.path} - {decision.cause}"

        details = f"(Hash: {decision.fingerprint}, Duplicates: {', '.join(decision.duplicates)})"
        if decision.kind == DecisionKind.KEEP:
            return f"Kept {decision.path} {details}"
        if decision.kind == DecisionKind.SKIP:
            return f"Skipped {decision.path} {details}"
        if decision.dry_run:
            return f"DRY run: Would delete {decision.path} {details}"
        return f"Deleted {decision.path} {details}"

    def record(self, decision: DeletionDecision) -> None:
        self._write_line(self.format_decision(decision))

    def _write_line(self, line: str) -> None:
        if self._stream is None:
            raise RuntimeError(f"Action log already closed: {self.path}")
        self._stream.write(line + "\n")
        self._stream.flush()

    @property
    def closed(self) -> bool:
        return self._stream is None

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> "ActionLog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
