"""Main window for the pathfinding visualizer."""

import time

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QKeySequence, QPalette, QShortcut
from PySide6.QtWidgets import (
    QButtonGroup, QCheckBox, QComboBox, QFileDialog, QFrame, QGroupBox,
    QHBoxLayout, QLabel, QMainWindow, QPushButton, QRadioButton, QSlider,
    QSpinBox, QStatusBar, QVBoxLayout, QWidget,
)

from ..app.controller import PathfinderController
from ..app.fsm import VisualizationState
from ..domain.heuristics import HEURISTICS, is_admissible
from ..domain.types import CellRole
from .grid_view import GridView
from .tiles import CellTile


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, controller: PathfinderController):
        super().__init__()
        self.controller = controller

        self.setWindowTitle("Pathfinding Visualizer")
        self.setMinimumSize(1000, 700)

        self.run_started_at = None
        self.run_finished_at = None

        self._create_ui()
        self._setup_connections()
        self._setup_shortcuts()

        self._update_button_states()
        self._update_statistics_display()

    def _create_ui(self):
        """Create the user interface."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        main_layout.addLayout(self._create_controls())

        content_layout = QHBoxLayout()
        self.grid_view = GridView(self.controller)
        content_layout.addWidget(self.grid_view, 3)
        content_layout.addWidget(self._create_statistics_panel(), 1)
        main_layout.addLayout(content_layout, 1)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage(
            "Ready - click to place walls | Enter: run, Space: step, P: pause, F: fast forward, R: reset"
        )

    def _create_controls(self) -> QHBoxLayout:
        """Create the control panel."""
        layout = QHBoxLayout()

        # Search controls
        search_group = QGroupBox("Search")
        search_layout = QHBoxLayout(search_group)
        self.run_btn = QPushButton("Run")
        self.step_btn = QPushButton("Step")
        self.pause_btn = QPushButton("Pause")
        self.reset_btn = QPushButton("Reset")
        self.clear_btn = QPushButton("Clear")
        self.fast_cb = QCheckBox("Fast")
        for widget in [self.run_btn, self.step_btn, self.pause_btn, self.reset_btn,
                       self.clear_btn, self.fast_cb]:
            search_layout.addWidget(widget)

        # Speed control (timer interval in ms)
        speed_layout = QVBoxLayout()
        speed_layout.addWidget(QLabel("Frame interval"))
        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(10, 1000)
        self.speed_slider.setValue(self.controller.speed)
        speed_layout.addWidget(self.speed_slider)

        # Grid controls
        grid_group = QGroupBox("Grid")
        grid_layout = QHBoxLayout(grid_group)
        grid_layout.addWidget(QLabel("Size:"))
        self.width_spin = QSpinBox()
        self.width_spin.setRange(5, 99)
        self.width_spin.setValue(self.controller.grid.width)
        grid_layout.addWidget(self.width_spin)
        grid_layout.addWidget(QLabel("×"))
        self.height_spin = QSpinBox()
        self.height_spin.setRange(5, 99)
        self.height_spin.setValue(self.controller.grid.height)
        grid_layout.addWidget(self.height_spin)

        self.new_grid_btn = QPushButton("New")
        self.maze_btn = QPushButton("Maze")
        self.walls_btn = QPushButton("Random Walls")
        self.save_btn = QPushButton("Save")
        self.load_btn = QPushButton("Load")
        for btn in [self.new_grid_btn, self.maze_btn, self.walls_btn, self.save_btn, self.load_btn]:
            grid_layout.addWidget(btn)

        # Edit mode
        edit_group = QGroupBox("Edit Mode")
        edit_layout = QVBoxLayout(edit_group)
        self.edit_button_group = QButtonGroup()
        self.edit_radios = {}
        for mode, label in [("wall", "Walls"), ("start", "Start"), ("end", "End"), ("erase", "Erase")]:
            radio = QRadioButton(label)
            self.edit_button_group.addButton(radio)
            edit_layout.addWidget(radio)
            self.edit_radios[mode] = radio
        self.edit_radios["wall"].setChecked(True)

        # Search settings
        settings_group = QGroupBox("Settings")
        settings_layout = QVBoxLayout(settings_group)
        self.algorithm_combo = QComboBox()
        self.algorithm_combo.addItems(["astar", "dijkstra", "bfs"])
        self.heuristic_combo = QComboBox()
        self.heuristic_combo.addItems(["default"] + sorted(HEURISTICS))
        self.diagonal_cb = QCheckBox("Diagonal moves")
        self.corner_cb = QCheckBox("Cut corners")
        self.corner_cb.setChecked(True)
        self.show_costs_cb = QCheckBox("Show costs")
        for widget in [self.algorithm_combo, self.heuristic_combo, self.diagonal_cb,
                       self.corner_cb, self.show_costs_cb]:
            settings_layout.addWidget(widget)

        layout.addWidget(search_group)
        layout.addLayout(speed_layout)
        layout.addWidget(grid_group)
        layout.addWidget(edit_group)
        layout.addWidget(settings_group)
        layout.addStretch()
        return layout

    def _create_statistics_panel(self) -> QGroupBox:
        """Create the statistics display panel."""
        stats_group = QGroupBox("Statistics")
        stats_layout = QVBoxLayout(stats_group)

        self.state_label = QLabel()
        self.explored_label = QLabel()
        self.open_label = QLabel()
        self.path_label = QLabel()
        self.time_label = QLabel()
        for label in [self.state_label, self.explored_label, self.open_label,
                      self.path_label, self.time_label]:
            stats_layout.addWidget(label)

        stats_layout.addWidget(self._create_color_legend())
        stats_layout.addStretch()
        return stats_group

    def _create_color_legend(self) -> QGroupBox:
        """Create the color legend for the cell roles."""
        legend_group = QGroupBox("Legend")
        legend_layout = QVBoxLayout(legend_group)

        legend_items = [
            (CellTile.COLORS[CellRole.EMPTY], "Empty"),
            (CellTile.COLORS[CellRole.WALL], "Wall"),
            (CellTile.COLORS[CellRole.START], "Start"),
            (CellTile.COLORS[CellRole.END], "End"),
            (CellTile.COLORS[CellRole.FRONTIER], "Frontier (open set)"),
            (CellTile.COLORS[CellRole.VISITED], "Visited (closed set)"),
            (CellTile.CURRENT_COLOR, "Current cell"),
            (CellTile.COLORS[CellRole.PATH], "Path"),
        ]
        for color, description in legend_items:
            legend_layout.addWidget(self._create_legend_item(color, description))
        return legend_group

    def _create_legend_item(self, color: QColor, description: str) -> QWidget:
        """Create a single legend item with color box and description."""
        item_widget = QWidget()
        item_layout = QHBoxLayout(item_widget)
        item_layout.setContentsMargins(2, 2, 2, 2)

        color_box = QFrame()
        color_box.setFixedSize(16, 16)
        color_box.setAutoFillBackground(True)
        palette = color_box.palette()
        palette.setColor(QPalette.Window, color)
        color_box.setPalette(palette)
        color_box.setFrameStyle(QFrame.Box | QFrame.Raised)

        item_layout.addWidget(color_box)
        item_layout.addWidget(QLabel(description))
        item_layout.addStretch()
        return item_widget

    def _setup_connections(self):
        """Setup signal connections."""
        self.run_btn.clicked.connect(self._on_run_clicked)
        self.step_btn.clicked.connect(self._on_step_clicked)
        self.pause_btn.clicked.connect(self.controller.pause_search)
        self.reset_btn.clicked.connect(self.controller.reset_search)
        self.clear_btn.clicked.connect(self.controller.clear_grid)
        self.fast_cb.toggled.connect(self._on_fast_toggled)
        self.speed_slider.valueChanged.connect(self._on_speed_changed)

        self.new_grid_btn.clicked.connect(self._on_new_grid)
        self.maze_btn.clicked.connect(self._on_maze)
        self.walls_btn.clicked.connect(self._on_random_walls)
        self.save_btn.clicked.connect(self._on_save)
        self.load_btn.clicked.connect(self._on_load)

        for mode, radio in self.edit_radios.items():
            radio.toggled.connect(lambda checked, m=mode: checked and self.grid_view.set_edit_mode(m))

        self.algorithm_combo.currentTextChanged.connect(self._on_settings_changed)
        self.heuristic_combo.currentTextChanged.connect(self._on_settings_changed)
        self.diagonal_cb.toggled.connect(self._on_settings_changed)
        self.corner_cb.toggled.connect(self._on_settings_changed)
        self.show_costs_cb.toggled.connect(self.grid_view.set_show_costs)

        self.controller.state_changed.connect(self._on_state_changed)
        self.controller.error_occurred.connect(self._on_error)
        self.controller.search_finished.connect(self._on_search_finished)
        self.controller.step_completed.connect(lambda steps: self._update_statistics_display())

    def _setup_shortcuts(self):
        """Setup keyboard shortcuts."""
        QShortcut(QKeySequence("Return"), self, self._on_run_clicked)
        QShortcut(QKeySequence("Space"), self, self._on_step_clicked)
        QShortcut(QKeySequence("P"), self, self.controller.pause_search)
        QShortcut(QKeySequence("F"), self, self.fast_cb.toggle)
        QShortcut(QKeySequence("R"), self, self.controller.reset_search)
        QShortcut(QKeySequence("C"), self, self.controller.clear_grid)

        QShortcut(QKeySequence("Ctrl+N"), self, self._on_new_grid)
        QShortcut(QKeySequence("Ctrl+M"), self, self._on_maze)
        QShortcut(QKeySequence("Ctrl+S"), self, self._on_save)
        QShortcut(QKeySequence("Ctrl+O"), self, self._on_load)

        QShortcut(QKeySequence("Q"), self, self.close)
        QShortcut(QKeySequence("Escape"), self, self.close)

    # Handlers

    def _on_run_clicked(self):
        """Run from editing, resume from paused."""
        if self.controller.current_state == VisualizationState.PAUSED:
            self.controller.resume_search()
        else:
            self.controller.start_search()

    def _on_step_clicked(self):
        self.controller.step_search()

    def _on_fast_toggled(self, checked: bool):
        if self.controller.session.fast_forward != checked:
            self.controller.toggle_fast_forward()

    def _on_speed_changed(self, value: int):
        self.controller.speed = value

    def _on_new_grid(self):
        self.controller.create_new_grid(self.width_spin.value(), self.height_spin.value())

    def _on_maze(self):
        if self.controller.generate_maze(self.width_spin.value(), self.height_spin.value()):
            self.status_bar.showMessage("Generated maze (recursive backtracker)")

    def _on_random_walls(self):
        self.controller.add_random_walls(0.3)

    def _on_save(self):
        filepath, _ = QFileDialog.getSaveFileName(self, "Save Layout", "", "Layouts (*.json)")
        if filepath and self.controller.save_layout(filepath):
            self.status_bar.showMessage(f"Saved layout to {filepath}")

    def _on_load(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Load Layout", "", "Layouts (*.json)")
        if filepath and self.controller.load_layout(filepath):
            self.width_spin.setValue(self.controller.grid.width)
            self.height_spin.setValue(self.controller.grid.height)
            self.status_bar.showMessage(f"Loaded layout from {filepath}")

    def _on_settings_changed(self, *_):
        heuristic = self.heuristic_combo.currentText()
        connectivity = 8 if self.diagonal_cb.isChecked() else 4
        applied = self.controller.update_search_config(
            algorithm=self.algorithm_combo.currentText(),
            heuristic=None if heuristic == "default" else heuristic,
            connectivity=connectivity,
            corner_cutting=self.corner_cb.isChecked(),
        )
        if applied and heuristic != "default" and not is_admissible(heuristic, connectivity):
            self.status_bar.showMessage(f"Note: {heuristic} may overestimate; paths may not be shortest")

    def _on_state_changed(self, state: VisualizationState):
        if state == VisualizationState.RUNNING and self.run_started_at is None:
            self.run_started_at = time.time()
            self.run_finished_at = None
        elif state == VisualizationState.EDITING:
            self.run_started_at = None
            self.run_finished_at = None

        self._update_button_states()
        self._update_statistics_display()
        self.status_bar.showMessage(f"State: {state.value.title()}")

    def _on_error(self, error_msg: str):
        self.status_bar.showMessage(f"Error: {error_msg}")

    def _on_search_finished(self, result):
        self.run_finished_at = time.time()
        if result.success:
            self.status_bar.showMessage(
                f"Path found! Cost: {result.path_cost:.2f}, cells explored: {result.nodes_explored}"
            )
        else:
            self.status_bar.showMessage(f"No path exists. Cells explored: {result.nodes_explored}")
        self._update_statistics_display()

    def _update_button_states(self):
        """Enable buttons according to the session state."""
        state = self.controller.current_state
        self.run_btn.setText("Resume" if state == VisualizationState.PAUSED else "Run")
        self.run_btn.setEnabled(state in (VisualizationState.EDITING, VisualizationState.PAUSED))
        self.step_btn.setEnabled(state in (VisualizationState.EDITING, VisualizationState.PAUSED))
        self.pause_btn.setEnabled(state == VisualizationState.RUNNING)
        self.reset_btn.setEnabled(state != VisualizationState.EDITING)
        for widget in [self.algorithm_combo, self.heuristic_combo, self.diagonal_cb, self.corner_cb]:
            widget.setEnabled(state in (VisualizationState.EDITING, VisualizationState.FINISHED))

    def _update_statistics_display(self):
        stats = self.controller.get_statistics()
        self.state_label.setText(f"State: {stats['state_description']}")
        self.explored_label.setText(f"Cells explored: {stats['nodes_explored']}")
        self.open_label.setText(f"Frontier size: {stats['open_set_size']}")
        self.path_label.setText(f"Path: {stats['path_length']} moves, cost {stats['path_cost']:.2f}")

        elapsed = 0.0
        if self.run_started_at is not None:
            elapsed = (self.run_finished_at or time.time()) - self.run_started_at
        self.time_label.setText(f"Elapsed: {elapsed:.2f}s")

    def closeEvent(self, event):
        """Stop the frame clock before closing."""
        self.controller.shutdown()
        event.accept()
