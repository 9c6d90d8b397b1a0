"""Main entry point for the Pathfinding Visualizer."""

import argparse
import logging
import sys
from typing import List, Optional

from .app.config import SessionConfig
from .app.session import VisualizationSession
from .domain.heuristics import HEURISTICS
from .domain.types import SearchConfig, SearchStatus
from .utils.grid_factory import generate_maze, generate_random_grid, render_ascii
from .utils.layout_io import load_layout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathviz", description="Grid pathfinding visualizer")
    parser.add_argument("--width", type=int, default=25, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=25, help="Grid height in cells")
    parser.add_argument("--cell-size", type=int, default=25, help="Cell size in pixels")
    parser.add_argument("--interval", type=int, default=50, help="Frame interval in milliseconds")
    parser.add_argument("--steps-per-tick", type=int, default=1, help="Engine steps per frame")
    parser.add_argument("--algorithm", choices=["astar", "dijkstra", "bfs"], default="astar")
    parser.add_argument("--heuristic", choices=sorted(HEURISTICS), default=None,
                        help="Heuristic (default depends on connectivity)")
    parser.add_argument("--diagonal", action="store_true", help="Use 8-connectivity")
    parser.add_argument("--no-corner-cutting", action="store_true",
                        help="Refuse diagonal moves between two walls")
    parser.add_argument("--max-steps", type=int, default=None, help="Step budget for headless runs")
    parser.add_argument("--layout", type=str, help="Path to a saved layout (JSON)")
    parser.add_argument("--maze", action="store_true", help="Start from a generated maze")
    parser.add_argument("--density", type=float, default=0.25,
                        help="Wall density for a random layout in headless mode")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for generated layouts")
    parser.add_argument("--headless", action="store_true",
                        help="Run the search without a window and print the result")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args) -> SessionConfig:
    """Translate command-line flags into a SessionConfig."""
    search = SearchConfig(
        connectivity=8 if args.diagonal else 4,
        heuristic=args.heuristic,
        algorithm=args.algorithm,
        corner_cutting=not args.no_corner_cutting,
    )
    return SessionConfig(
        width=args.width,
        height=args.height,
        cell_size=args.cell_size,
        tick_interval_ms=args.interval,
        steps_per_tick=args.steps_per_tick,
        max_steps=args.max_steps,
        search=search,
    )


def run_headless(args, config: SessionConfig) -> int:
    """Run one search to completion and print statistics and the final grid."""
    if args.layout:
        grid = load_layout(args.layout).to_grid()
    elif args.maze:
        grid = generate_maze(config.width, config.height, seed=args.seed)
    else:
        grid = generate_random_grid(config.width, config.height, args.density, seed=args.seed)

    session = VisualizationSession(config, grid)
    status = session.run_to_completion()
    stats = session.get_statistics()

    print(render_ascii(session.grid))
    print()
    print(f"Grid: {grid.width}x{grid.height}, start {grid.start_coord}, end {grid.end_coord}")
    print(f"Algorithm: {config.search.algorithm}, {config.search.connectivity}-connected")
    print(f"Status: {status.value}")
    print(f"Cells explored: {stats['nodes_explored']}")
    if status is SearchStatus.FOUND:
        print(f"Path: {stats['path_length']} moves, cost {stats['path_cost']:.3f}")
    return 0 if status is SearchStatus.FOUND else 2


def run_gui(args, config: SessionConfig) -> int:
    """Open the visualizer window."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Pathfinding Visualizer")
    app.setApplicationVersion("1.0.0")

    # Import UI components (after QApplication is created)
    from .app.controller import PathfinderController
    from .ui.main_window import MainWindow

    controller = PathfinderController(config)
    if args.layout:
        controller.load_layout(args.layout)
    elif args.maze:
        controller.generate_maze(config.width, config.height, seed=args.seed)

    window = MainWindow(controller)
    window.show()
    try:
        return app.exec()
    finally:
        controller.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
        if args.headless:
            return run_headless(args, config)
        return run_gui(args, config)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
