"""Step trace logging."""

from tustin_control.logging.csv_logger import CSVLogger

__all__ = [
    "CSVLogger",
]
