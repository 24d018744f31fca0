"""
Buffered CSV trace logging for filter and controller steps.

Features:
- Buffered writes so a control loop does not hit the disk every tick
- Flush on buffer size or time interval
- Thread-safe buffering
"""

from typing import List, Dict, Any, Sequence
from pathlib import Path
import csv
import time
import threading
from collections import deque


class CSVLogger:
    """
    CSV logger with buffering for high-frequency step traces.

    Example:
        >>> logger = CSVLogger("trace.csv", columns=["iteration", "input", "output"])
        >>> logger.log({"iteration": 0, "input": 1.0, "output": 0.5})
        >>> logger.close()
    """

    def __init__(
        self,
        file_path: str,
        columns: List[str],
        buffer_size: int = 100,
        flush_interval: float = 1.0,
        append: bool = False
    ):
        """
        Initialize CSV logger.

        Args:
            file_path: Path to CSV file
            columns: List of column names
            buffer_size: Number of rows to buffer before writing
            flush_interval: Maximum seconds between flushes
            append: If True, append to existing file
        """
        if not columns:
            raise ValueError("columns cannot be empty")
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        if flush_interval <= 0:
            raise ValueError("flush_interval must be positive")

        self._file_path = Path(file_path)
        self._columns = list(columns)
        self._buffer_size = buffer_size
        self._flush_interval = flush_interval

        self._lock = threading.Lock()
        self._buffer: deque = deque()
        self._last_flush_time = time.monotonic()
        self._total_rows = 0

        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        write_header = not append or not self._file_path.exists() \
            or self._file_path.stat().st_size == 0

        self._file = open(self._file_path, 'a' if append else 'w', newline='')
        self._writer = csv.DictWriter(self._file, fieldnames=self._columns)
        if write_header:
            self._writer.writeheader()

        self._closed = False

    def log(self, data: Dict[str, Any]) -> None:
        """
        Log a row of data.

        Args:
            data: Dictionary mapping column names to values.
                  Missing columns are written as empty strings.
        """
        self.log_batch([data])

    def log_batch(self, data_list: Sequence[Dict[str, Any]]) -> None:
        """Log multiple rows at once."""
        if self._closed:
            raise RuntimeError("Logger is closed")

        rows = [{col: data.get(col, '') for col in self._columns} for data in data_list]

        with self._lock:
            self._buffer.extend(rows)
            self._total_rows += len(rows)
            should_flush = (
                len(self._buffer) >= self._buffer_size or
                time.monotonic() - self._last_flush_time >= self._flush_interval
            )

        if should_flush:
            self.flush()

    def flush(self) -> None:
        """Flush buffer to disk."""
        with self._lock:
            if not self._buffer or self._closed:
                return
            rows_to_write = list(self._buffer)
            self._buffer.clear()
            self._last_flush_time = time.monotonic()

        try:
            self._writer.writerows(rows_to_write)
            self._file.flush()
        except OSError as e:
            with self._lock:
                self._buffer.extendleft(reversed(rows_to_write))
            raise RuntimeError(f"Failed to write to CSV: {e}") from e

    def close(self) -> None:
        """Close logger and flush remaining data."""
        if self._closed:
            return

        self.flush()

        with self._lock:
            self._closed = True
            self._file.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    @property
    def total_rows(self) -> int:
        """Total number of logged rows, written or buffered."""
        return self._total_rows

    @property
    def buffer_count(self) -> int:
        return len(self._buffer)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
