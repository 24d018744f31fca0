"""
Unit tests for the buffered CSV logger.
"""

import csv
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tustin_control.logging.csv_logger import CSVLogger


def read_rows(path):
    with open(path, newline='') as f:
        return list(csv.reader(f))


class TestCSVLogger:
    """Test suite for CSVLogger class."""

    def test_header_written(self, tmp_path):
        """Test the header row is written on open."""
        path = tmp_path / "trace.csv"
        logger = CSVLogger(str(path), columns=["a", "b"])
        logger.close()
        assert read_rows(path) == [["a", "b"]]

    def test_buffering(self, tmp_path):
        """Test rows stay buffered until the buffer fills."""
        path = tmp_path / "trace.csv"
        logger = CSVLogger(str(path), columns=["x"], buffer_size=3, flush_interval=60.0)

        logger.log({"x": 1})
        logger.log({"x": 2})
        assert logger.buffer_count == 2
        assert len(read_rows(path)) == 1

        logger.log({"x": 3})
        assert logger.buffer_count == 0
        assert len(read_rows(path)) == 4
        logger.close()

    def test_close_flushes(self, tmp_path):
        """Test close writes buffered rows."""
        path = tmp_path / "trace.csv"
        with CSVLogger(str(path), columns=["x"], flush_interval=60.0) as logger:
            logger.log_batch([{"x": i} for i in range(5)])
            assert logger.total_rows == 5

        assert logger.closed
        assert [row[0] for row in read_rows(path)[1:]] == ["0", "1", "2", "3", "4"]

    def test_log_after_close(self, tmp_path):
        """Test logging to a closed logger fails."""
        logger = CSVLogger(str(tmp_path / "trace.csv"), columns=["x"])
        logger.close()
        with pytest.raises(RuntimeError):
            logger.log({"x": 1})

    def test_missing_columns_blank(self, tmp_path):
        """Test absent keys are written as empty fields."""
        path = tmp_path / "trace.csv"
        with CSVLogger(str(path), columns=["a", "b"]) as logger:
            logger.log({"a": 1.5})
        assert read_rows(path)[1] == ["1.5", ""]

    def test_append_mode(self, tmp_path):
        """Test append mode does not repeat the header."""
        path = tmp_path / "trace.csv"
        with CSVLogger(str(path), columns=["x"]) as logger:
            logger.log({"x": 1})
        with CSVLogger(str(path), columns=["x"], append=True) as logger:
            logger.log({"x": 2})

        assert read_rows(path) == [["x"], ["1"], ["2"]]

    def test_creates_parent_directory(self, tmp_path):
        """Test nested output directories are created."""
        path = tmp_path / "logs" / "run1" / "trace.csv"
        CSVLogger(str(path), columns=["x"]).close()
        assert path.exists()

    def test_invalid_arguments(self, tmp_path):
        """Test constructor argument validation."""
        with pytest.raises(ValueError):
            CSVLogger(str(tmp_path / "a.csv"), columns=[])
        with pytest.raises(ValueError):
            CSVLogger(str(tmp_path / "b.csv"), columns=["x"], buffer_size=0)
        with pytest.raises(ValueError):
            CSVLogger(str(tmp_path / "c.csv"), columns=["x"], flush_interval=0.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
