"""CSV export functionality for the cooperative snake simulation."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import GameState

FIELDNAMES = [
    'tick', 'agent_id', 'head_x', 'head_y', 'length', 'direction',
    'score', 'steps_since_food', 'food_x', 'food_y',
]


class CSVWriter:
    """
    Exports per-tick agent state to CSV format incrementally.

    Output format:
        tick,agent_id,head_x,head_y,length,direction,score,steps_since_food,food_x,food_y
        1,Alpha,6,9,3,right,0,1,0,9
        ...
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        self.writer.writeheader()
        self._is_open = True

    def append(self, state: "GameState") -> None:
        """Write both agents' rows for the current tick."""
        if not self._is_open:
            self.open()
        for row in state.to_csv_rows():
            self.writer.writerow(row)
        self.file.flush()

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
