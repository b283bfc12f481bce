"""Tick engine for the cooperative snake simulation."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, TYPE_CHECKING

import numpy as np

from .agent import Agent, AgentId, spawn_agents
from .grid import ORIGIN, Cell, free_cells, in_bounds, step
from .occupancy import OccupancyIndex
from .planner import Plan, decide_plan
from .state import MAX_MESSAGES, GameState, Message, Snapshot, snapshot

if TYPE_CHECKING:
    from ..config import SimulationConfig


class CollisionKind(Enum):
    WALL = "wall"
    SELF = "self"
    PARTNER = "partner"


@dataclass(frozen=True)
class Collision:
    """Which snake hit what, and where."""
    kind: CollisionKind
    agent_id: AgentId
    cell: Cell


class FatalCollision(Exception):
    """Raised while resolving a move that ends the run; never leaves this module."""

    def __init__(self, collision: Collision):
        super().__init__(f"{collision.agent_id.value} hit {collision.kind.value} "
                         f"at ({collision.cell.x},{collision.cell.y})")
        self.collision = collision


@dataclass(frozen=True)
class TickOutcome:
    state: GameState
    collision: Optional[Collision] = None


def _ensure_rng(rng) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _draw(candidates: List[Cell], rng) -> Cell:
    """Pick a cell uniformly, or the origin if there is nothing to pick."""
    if not candidates:
        return ORIGIN
    return candidates[int(rng.integers(0, len(candidates)))]


def spawn_food(occupancy: OccupancyIndex, rng=None) -> Cell:
    """Draw a food cell uniformly from cells missing from the index."""
    return _draw(occupancy.free_cells(), _ensure_rng(rng))


def initialize(rng=None) -> GameState:
    """Canonical launch state: mirrored snakes, random food, empty log."""
    agents = spawn_agents()
    occupied = [cell for agent in agents for cell in agent.body]
    food = _draw(free_cells(occupied), _ensure_rng(rng))
    return GameState(agents=agents, food=food, tick=0, messages=())


def _check_move(agent: Agent, plan: Plan, occupancy: OccupancyIndex) -> Cell:
    """Return the new head cell, raising FatalCollision if it is not enterable."""
    head = step(agent.head, plan.direction)
    if not in_bounds(head):
        raise FatalCollision(Collision(CollisionKind.WALL, agent.id, head))

    occupant = occupancy.get(head)
    if occupant is not None and not occupancy.allows_entry(head, agent.id, plan.will_eat):
        kind = CollisionKind.SELF if occupant.agent_id is agent.id else CollisionKind.PARTNER
        raise FatalCollision(Collision(kind, agent.id, head))
    return head


def _apply_move(agent: Agent, plan: Plan, occupancy: OccupancyIndex) -> Agent:
    """Move agent and keep the occupancy index in step with its new body."""
    head = _check_move(agent, plan, occupancy)
    if not plan.will_eat:
        occupancy.vacate(agent.tail)
    occupancy.claim(head, agent.id, is_tail=False)

    moved = agent.moved(plan.direction, grow=plan.will_eat)
    occupancy.claim(moved.tail, agent.id, is_tail=True)
    return moved


def _play_tick(state: GameState, rng) -> GameState:
    """
    Resolve one tick without any reset handling.

    Agents are processed in fixed order, Alpha first. Each one plans
    against the occupancy left by the agents before it, and `food_claimed`
    carries Alpha's intent over to Bravo's planner.
    """
    tick = state.tick + 1
    occupancy = OccupancyIndex.build(state.agents)
    agents = list(state.agents)
    messages = list(state.messages)
    food = state.food
    food_claimed = False

    for i, current in enumerate(agents):
        partner = agents[1 - i]
        plan = decide_plan(current, partner, food, occupancy, food_claimed)

        if plan.message:
            messages.append(Message(tick=tick, sender=current.id, text=plan.message))
        if plan.pursuing:
            food_claimed = True

        agents[i] = _apply_move(current, plan, occupancy)
        if plan.will_eat:
            food = spawn_food(occupancy, rng)

    return GameState(
        agents=(agents[0], agents[1]),
        food=food,
        tick=tick,
        messages=tuple(messages[-MAX_MESSAGES:]),
    )


def resolve_tick(state: GameState, rng=None) -> TickOutcome:
    """
    Advance one tick and report any fatal collision.

    A collision anywhere in the tick discards every partial update of that
    tick; the result is then a freshly initialized state.
    """
    rng = _ensure_rng(rng)
    try:
        return TickOutcome(state=_play_tick(state, rng))
    except FatalCollision as exc:
        return TickOutcome(state=initialize(rng), collision=exc.collision)


def advance(state: GameState, rng=None) -> GameState:
    """Perform exactly one tick, resetting on any fatal collision."""
    return resolve_tick(state, rng).state


class SimulationEngine:
    """
    Stateful wrapper for drivers that tick the simulation repeatedly.

    Holds the current GameState and a seeded random generator, and keeps
    run-level counters that the pure tick functions deliberately do not.
    """

    def __init__(self, config: "SimulationConfig"):
        self.config = config
        self.current_step = 0
        self.rng = np.random.default_rng(config.seed)
        self.state = initialize(self.rng)

        # Metrics tracking
        self.resets: Dict[CollisionKind, int] = {kind: 0 for kind in CollisionKind}
        self.foods_eaten = 0
        self.best_score = 0
        self.last_collision: Optional[Collision] = None

    def step(self) -> GameState:
        """Execute one tick and return the new state."""
        self.current_step += 1
        previous = self.state
        outcome = resolve_tick(previous, self.rng)
        self.last_collision = outcome.collision

        if outcome.collision is not None:
            self.resets[outcome.collision.kind] += 1
        else:
            self.foods_eaten += sum(
                new.score - old.score
                for new, old in zip(outcome.state.agents, previous.agents)
            )

        self.state = outcome.state
        self.best_score = max(self.best_score,
                              sum(a.score for a in self.state.agents))
        return self.state

    def snapshot(self) -> Snapshot:
        return snapshot(self.state)

    def reset(self) -> GameState:
        """Restart from the launch layout, as the reset button does."""
        self.state = initialize(self.rng)
        self.last_collision = None
        return self.state

    def is_finished(self) -> bool:
        """Check if the configured number of ticks has run."""
        return self.current_step >= self.config.max_steps

    def get_summary(self) -> Dict:
        """Get summary statistics for the run so far."""
        return {
            'total_steps': self.current_step,
            'foods_eaten': self.foods_eaten,
            'best_combined_score': self.best_score,
            'total_resets': sum(self.resets.values()),
            'resets_by_cause': {k.value: v for k, v in self.resets.items()},
        }
