"""Model package for the cooperative snake simulation."""

from .grid import BOARD_SIZE, Cell, Direction, distance, in_bounds, step
from .agent import Agent, AgentId
from .occupancy import OccupancyIndex, Occupant
from .planner import Plan, decide_plan
from .state import MAX_MESSAGES, CellView, GameState, Message, Snapshot, snapshot
from .engine import (Collision, CollisionKind, SimulationEngine, TickOutcome,
                     advance, initialize, resolve_tick)

__all__ = [
    'BOARD_SIZE',
    'MAX_MESSAGES',
    'Cell',
    'Direction',
    'distance',
    'in_bounds',
    'step',
    'Agent',
    'AgentId',
    'OccupancyIndex',
    'Occupant',
    'Plan',
    'decide_plan',
    'CellView',
    'GameState',
    'Message',
    'Snapshot',
    'snapshot',
    'Collision',
    'CollisionKind',
    'SimulationEngine',
    'TickOutcome',
    'advance',
    'initialize',
    'resolve_tick',
]
