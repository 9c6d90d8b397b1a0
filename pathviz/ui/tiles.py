"""Grid tile graphics items for the pathfinding view."""

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QGraphicsRectItem

from ..domain.types import Cell, CellRole

# Smallest tile edge, in pixels, that still fits the g/h/f labels
COST_LABEL_MIN_SIZE = 20


class CellTile(QGraphicsRectItem):
    """Graphics item representing a single grid cell."""

    # Color scheme for the cell roles
    COLORS = {
        CellRole.EMPTY: QColor(240, 240, 240),     # Light gray
        CellRole.WALL: QColor(64, 64, 64),         # Dark gray
        CellRole.START: QColor(0, 200, 0),         # Green
        CellRole.END: QColor(220, 40, 40),         # Red
        CellRole.VISITED: QColor(255, 182, 193),   # Light pink
        CellRole.FRONTIER: QColor(173, 216, 230),  # Light blue
        CellRole.PATH: QColor(255, 215, 0),        # Gold
    }
    CURRENT_COLOR = QColor(255, 120, 0)

    def __init__(self, x: int, y: int, size: float, cell: Cell):
        super().__init__(0, 0, size, size)
        self.grid_x = x
        self.grid_y = y
        self.size = size
        self.cell = cell
        self.show_costs = False
        self.is_current = False

        self.setPos(x * size, y * size)
        self.update_appearance()

    def update_appearance(self):
        """Update the tile colour from the cell role."""
        if self.is_current and not self.cell.role.is_marker:
            color = self.CURRENT_COLOR
        else:
            color = self.COLORS[self.cell.role]
        self.setBrush(QBrush(color))

        if self.cell.role is CellRole.WALL:
            self.setPen(QPen(Qt.black, 1))
        else:
            self.setPen(QPen(Qt.gray, 0.5))

    def paint(self, painter: QPainter, option, widget=None):
        """Paint the tile with costs if enabled."""
        super().paint(painter, option, widget)

        if self.costs_visible():
            self._paint_costs(painter)

    def costs_visible(self) -> bool:
        """Whether the cost labels are drawn on this tile."""
        return (self.show_costs and self.size >= COST_LABEL_MIN_SIZE
                and self.cell.seen and not self.cell.role.is_marker)

    def _paint_costs(self, painter: QPainter):
        """Paint g (top-left), h (top-right) and f (bottom) on the tile."""
        rect = self.rect()
        painter.setFont(QFont("Arial", max(6, int(self.size / 6))))
        painter.setPen(Qt.black)

        third_w = rect.width() / 3
        third_h = rect.height() / 3
        painter.drawText(QRectF(rect.left() + 2, rect.top() + 2, third_w, third_h),
                         Qt.AlignCenter, f"{self.cell.g_cost:.1f}")
        painter.drawText(QRectF(rect.right() - third_w, rect.top() + 2, third_w, third_h),
                         Qt.AlignCenter, f"{self.cell.h_cost:.1f}")
        painter.drawText(QRectF(rect.left() + rect.width() / 4, rect.bottom() - third_h,
                                rect.width() / 2, third_h),
                         Qt.AlignCenter, f"{self.cell.f_cost:.1f}")

    def set_show_costs(self, show: bool):
        """Enable or disable cost display."""
        self.show_costs = show
        self.update()
