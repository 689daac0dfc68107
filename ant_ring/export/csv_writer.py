"""CSV export functionality for the ant ring simulation."""

import csv
from pathlib import Path
from typing import IO, Optional

from ..model.state import FrameSnapshot


class CSVWriter:
    """
    Streams the interpolated ant trace to CSV, one row per ant per frame.

    Columns come from ``FrameSnapshot.CSV_FIELDS``:
        frame,time,phase,tag,position,orientation
        1,0.004,0.0,0,0.123456,forward
        ...
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self._handle: Optional[IO[str]] = None
        self._rows: Optional[csv.DictWriter] = None
        self.rows_written = 0

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> None:
        """Create the output file and write the header row."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.output_path, 'w', newline='')
        self._rows = csv.DictWriter(self._handle,
                                    fieldnames=FrameSnapshot.CSV_FIELDS)
        self._rows.writeheader()

    def append(self, snapshot: FrameSnapshot) -> None:
        """Write every ant of one frame."""
        if not self.is_open:
            self.open()
        rows = snapshot.to_csv_rows()
        self._rows.writerows(rows)
        self.rows_written += len(rows)
        self._handle.flush()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._rows = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
