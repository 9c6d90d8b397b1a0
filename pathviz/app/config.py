"""Startup configuration handed to the session by the host application."""

from dataclasses import dataclass, field
from typing import Optional

from ..domain.types import SearchConfig


@dataclass
class SessionConfig:
    """Grid size, pacing and search options for one visualization session."""
    width: int = 25
    height: int = 25
    cell_size: int = 25            # pixels per cell, used by the view only
    tick_interval_ms: int = 50     # frame period of the host timer
    steps_per_tick: int = 1
    fast_forward_steps: int = 25   # steps per tick while fast-forwarding
    max_steps: Optional[int] = None  # budget for bulk runs; None scales with the grid
    search: SearchConfig = field(default_factory=SearchConfig)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if self.cell_size <= 0:
            raise ValueError(f"Cell size must be positive, got {self.cell_size}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {self.tick_interval_ms}")
        if self.steps_per_tick < 1 or self.fast_forward_steps < 1:
            raise ValueError("Steps per tick must be at least 1")
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError(f"Step budget must be at least 1, got {self.max_steps}")
