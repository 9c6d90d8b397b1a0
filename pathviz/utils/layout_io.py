"""
Layout serialization for saving and loading grids.
A layout is the user-placed part of a grid: size, walls, start and end.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..domain.grid import Grid
from ..domain.types import CellRole, Coord

logger = logging.getLogger(__name__)

LAYOUT_VERSION = "1.0"


class LayoutData:
    """Container for a grid layout with metadata."""

    def __init__(self, width: int, height: int, walls: List[Coord],
                 start: Optional[Coord] = None, end: Optional[Coord] = None,
                 name: str = "", description: str = ""):
        self.width = width
        self.height = height
        self.walls = walls
        self.start = start
        self.end = end
        self.name = name
        self.description = description
        self.created_at = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert layout data to a dictionary for serialization."""
        return {
            "width": self.width,
            "height": self.height,
            "walls": [list(coord) for coord in self.walls],
            "start": list(self.start) if self.start is not None else None,
            "end": list(self.end) if self.end is not None else None,
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at,
            "version": LAYOUT_VERSION,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutData":
        """
        Create layout data from a dictionary.

        Raises:
            ValueError: on missing keys or malformed coordinates
        """
        try:
            layout = cls(
                width=int(data["width"]),
                height=int(data["height"]),
                walls=[_to_coord(wall) for wall in data.get("walls", [])],
                start=_to_coord(data["start"]) if data.get("start") is not None else None,
                end=_to_coord(data["end"]) if data.get("end") is not None else None,
                name=data.get("name", ""),
                description=data.get("description", ""),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed layout data: {e}") from e
        layout.created_at = data.get("created_at", layout.created_at)
        layout.validate()
        return layout

    def validate(self):
        """Reject layouts whose start, end and walls overlap."""
        start = tuple(self.start) if self.start is not None else None
        end = tuple(self.end) if self.end is not None else None
        if start is not None and start == end:
            raise ValueError(f"Start and end share the cell {start}")
        walls = {tuple(wall) for wall in self.walls}
        for label, coord in (("Start", start), ("End", end)):
            if coord is not None and coord in walls:
                raise ValueError(f"{label} {coord} lies on a wall")

    @classmethod
    def from_grid(cls, grid: Grid, name: str = "") -> "LayoutData":
        """Extract the layout of a grid."""
        return cls(
            width=grid.width,
            height=grid.height,
            walls=grid.coords_with_role(CellRole.WALL),
            start=grid.start_coord,
            end=grid.end_coord,
            name=name,
        )

    def to_grid(self) -> Grid:
        """
        Build a fresh grid from this layout.

        Raises:
            ValueError: the start and end overlap each other or a wall
            OutOfBounds: a stored coordinate lies outside the stored size
        """
        self.validate()
        grid = Grid(self.width, self.height)
        for x, y in self.walls:
            grid.set_role(x, y, CellRole.WALL)
        if self.start is not None:
            grid.set_role(*self.start, CellRole.START)
        if self.end is not None:
            grid.set_role(*self.end, CellRole.END)
        return grid


def _to_coord(value) -> Coord:
    x, y = value
    return (int(x), int(y))


def save_layout(layout: LayoutData, filepath: Union[str, Path]) -> Path:
    """Save layout data to a JSON file, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(layout.to_dict(), f, indent=2)
    logger.info("Saved %dx%d layout to %s", layout.width, layout.height, path)
    return path


def load_layout(filepath: Union[str, Path]) -> LayoutData:
    """
    Load layout data from a JSON file.

    Raises:
        OSError: the file cannot be read
        ValueError: the file is not a valid layout
    """
    path = Path(filepath)
    with path.open("r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a layout object")
    layout = LayoutData.from_dict(data)
    logger.info("Loaded %dx%d layout from %s", layout.width, layout.height, path)
    return layout


def generate_layout_filename(layout: LayoutData, directory: Union[str, Path]) -> Path:
    """Generate a unique filename for a layout based on its metadata."""
    # Clean the name for filesystem use
    safe_name = "".join(c for c in layout.name if c.isalnum() or c in (" ", "-", "_")).strip()
    if not safe_name:
        safe_name = f"layout_{layout.width}x{layout.height}"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(directory) / f"{safe_name}_{timestamp}.json"
