"""Grid view for the pathfinding visualization."""

from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView

from ..app.controller import PathfinderController
from ..domain.grid import Grid
from ..domain.types import CellRole
from .tiles import CellTile

# Edit mode -> role assigned on click
EDIT_MODES = {
    "wall": CellRole.WALL,
    "start": CellRole.START,
    "end": CellRole.END,
    "erase": CellRole.EMPTY,
}


class GridView(QGraphicsView):
    """Graphics view that draws the grid and turns clicks into cell edits."""

    def __init__(self, controller: PathfinderController):
        super().__init__()

        self.controller = controller
        self.scene = QGraphicsScene()
        self.setScene(self.scene)

        self.tiles: List[CellTile] = []
        self._drawn_grid: Optional[Grid] = None
        self._current_tile: Optional[CellTile] = None
        self._drag_role: Optional[CellRole] = None

        self.tile_size = float(controller.config.cell_size)
        self.show_costs = False
        self.edit_mode = "wall"

        self.setRenderHint(QPainter.Antialiasing)

        self.controller.grid_updated.connect(self.update_grid)
        self.update_grid()

    def update_grid(self):
        """Redraw from the controller's grid, rebuilding tiles if the grid changed."""
        grid = self.controller.grid
        if grid is not self._drawn_grid:
            self._rebuild(grid)

        current = self.controller.session.engine.current
        if self._current_tile is not None:
            self._current_tile.is_current = False
            self._current_tile.update_appearance()
            self._current_tile = None
        if current is not None and self.controller.session.engine.is_running():
            self._current_tile = self.tiles[current]
            self._current_tile.is_current = True

        for tile in self.tiles:
            tile.update_appearance()

    def _rebuild(self, grid: Grid):
        self.scene.clear()
        self.tiles = []
        self._current_tile = None
        self.scene.setSceneRect(0, 0, grid.width * self.tile_size, grid.height * self.tile_size)

        # Tiles are stored in flat index order, matching grid.cell(index)
        for y in range(grid.height):
            for x in range(grid.width):
                tile = CellTile(x, y, self.tile_size, grid.get(x, y))
                tile.set_show_costs(self.show_costs)
                self.scene.addItem(tile)
                self.tiles.append(tile)
        self._drawn_grid = grid

    def set_show_costs(self, show: bool):
        """Enable or disable cost display on all tiles."""
        self.show_costs = show
        for tile in self.tiles:
            tile.set_show_costs(show)

    def set_edit_mode(self, mode: str):
        if mode not in EDIT_MODES:
            raise ValueError(f"Unknown edit mode: {mode}")
        self.edit_mode = mode

    def _cell_at(self, event):
        scene_pos = self.mapToScene(event.position().toPoint())
        x = int(scene_pos.x() // self.tile_size)
        y = int(scene_pos.y() // self.tile_size)
        if self.controller.grid.in_bounds(x, y):
            return x, y
        return None

    def mousePressEvent(self, event):
        """Apply the edit mode to the clicked cell."""
        if event.button() == Qt.LeftButton:
            coord = self._cell_at(event)
            if coord is not None:
                role = EDIT_MODES[self.edit_mode]
                # Clicking a wall in wall mode erases it; dragging keeps that choice
                if role is CellRole.WALL and self.controller.grid.role(*coord) is CellRole.WALL:
                    role = CellRole.EMPTY
                self._drag_role = role if role in (CellRole.WALL, CellRole.EMPTY) else None
                self.controller.set_cell_role(*coord, role)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        """Paint or erase walls while dragging."""
        if self._drag_role is not None and event.buttons() & Qt.LeftButton:
            coord = self._cell_at(event)
            if coord is not None and self.controller.grid.role(*coord) not in (
                    self._drag_role, CellRole.START, CellRole.END):
                self.controller.set_cell_role(*coord, self._drag_role)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        self._drag_role = None
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event):
        """Handle mouse wheel for zooming."""
        zoom_factor = 1.15
        if event.angleDelta().y() > 0:
            self.scale(zoom_factor, zoom_factor)
        else:
            self.scale(1 / zoom_factor, 1 / zoom_factor)

    def fit_in_view(self):
        """Fit the entire grid in the view."""
        if self.scene.items():
            self.fitInView(self.scene.itemsBoundingRect(), Qt.KeepAspectRatio)
