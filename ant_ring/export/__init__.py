"""I/O package for the ant ring simulation."""

from .csv_writer import CSVWriter
from .reporter import Reporter

__all__ = ['CSVWriter', 'Reporter']
