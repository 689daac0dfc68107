"""Model package for the ant ring simulation."""

from .agent import Agent, Orientation, arc_length, interpolate_position
from .state import SimulationState, Transition, AgentView, FrameSnapshot
from .engine import SimulationEngine, compute_transition, random_state

__all__ = [
    'Agent',
    'Orientation',
    'arc_length',
    'interpolate_position',
    'SimulationState',
    'Transition',
    'AgentView',
    'FrameSnapshot',
    'SimulationEngine',
    'compute_transition',
    'random_state',
]
