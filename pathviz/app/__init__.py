"""Session lifecycle and the Qt controller that drives it."""

from .config import SessionConfig
from .fsm import VisualizationState, VisualizationStateMachine
from .session import VisualizationSession
