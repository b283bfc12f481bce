"""Heuristic movement planner for the cooperative snakes."""

from dataclasses import dataclass
from typing import List, Optional

from .agent import Agent
from .grid import CANDIDATE_ORDER, Cell, Direction, distance, in_bounds, step
from .occupancy import OccupancyIndex


@dataclass(frozen=True)
class Plan:
    """Outcome of one planning pass for a single agent."""
    direction: Direction
    will_eat: bool
    pursuing: bool
    target: Cell
    message: Optional[str] = None


def should_pursue(agent: Agent, partner: Agent, food: Cell,
                  food_claimed: bool) -> bool:
    """
    Decide whether agent goes for the food this tick.

    Alpha takes the food whenever it is at least as close as Bravo. Bravo
    only goes when Alpha has not claimed it and is at most one step
    further away than Alpha.
    """
    dist_self = distance(agent.head, food)
    dist_partner = distance(partner.head, food)
    if agent.is_alpha:
        return dist_self <= dist_partner
    return not food_claimed and dist_self <= dist_partner + 1


def safe_directions(agent: Agent, occupancy: OccupancyIndex, food: Cell,
                    anticipates_growth: bool) -> List[Direction]:
    """
    Directions the agent can take without an obvious collision.

    Reversing is never offered. The agent's own tail counts as free unless
    it expects to grow this tick and the move is not the one eating.
    """
    safe = []
    for direction in CANDIDATE_ORDER:
        if direction is agent.direction.opposite:
            continue
        nxt = step(agent.head, direction)
        if not in_bounds(nxt):
            continue
        growing = anticipates_growth and nxt != food
        if occupancy.allows_entry(nxt, agent.id, growing):
            safe.append(direction)
    return safe


def prioritize(origin: Cell, target: Cell,
               options: List[Direction]) -> List[Direction]:
    """Sort options by resulting distance to target; ties keep their order."""
    return sorted(options, key=lambda d: distance(step(origin, d), target))


def _status_message(agent: Agent, pursuing: bool, food: Cell,
                    dist_self: int, food_claimed: bool) -> Optional[str]:
    if agent.is_alpha:
        if pursuing:
            return f"Moving for food ({food.x},{food.y}) in {dist_self} steps"
        return "Skipping food; optimizing coil"
    if pursuing:
        return f"Food is open; intercepting in {dist_self} steps"
    if food_claimed:
        return "Alpha on food; condensing tail"
    return None


def decide_plan(agent: Agent, partner: Agent, food: Cell,
                occupancy: OccupancyIndex, food_claimed: bool) -> Plan:
    """
    Choose the agent's move for this tick.

    Deterministic: the pursuing agent heads for the food, the other one
    chases its own tail to keep its coil tight. When no direction is
    safe the agent keeps going straight and the engine judges the result.
    The best-ranked safe move always wins, even over a safe straight-ahead move.
    """
    pursuing = should_pursue(agent, partner, food, food_claimed)
    target = food if pursuing else agent.tail
    dist_self = distance(agent.head, food)
    anticipates_growth = pursuing and dist_self == 1

    options = prioritize(
        agent.head, target,
        safe_directions(agent, occupancy, food, anticipates_growth)
    )
    chosen = options[0] if options else agent.direction
    will_eat = pursuing and step(agent.head, chosen) == food

    return Plan(
        direction=chosen,
        will_eat=will_eat,
        pursuing=pursuing,
        target=target,
        message=_status_message(agent, pursuing, food, dist_self, food_claimed),
    )
