from typing import Iterable, Sequence, Tuple

import numpy as np
import pytest

from coop_snake.model.agent import COLORS, Agent, AgentId
from coop_snake.model.grid import Cell, Direction
from coop_snake.model.state import GameState, Message


class StubRng:
    """Stands in for numpy's Generator; replays fixed indices, then 0."""

    def __init__(self, picks: Sequence[int] = ()):
        self.picks = list(picks)
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        value = self.picks.pop(0) if self.picks else 0
        return low + value


def make_agent(agent_id: AgentId, cells: Iterable[Tuple[int, int]],
               direction: Direction, score: int = 0,
               steps_since_food: int = 0) -> Agent:
    return Agent(
        id=agent_id,
        body=tuple(Cell(x, y) for x, y in cells),
        direction=direction,
        color=COLORS[agent_id],
        score=score,
        steps_since_food=steps_since_food,
    )


def make_state(alpha: Agent, bravo: Agent, food: Tuple[int, int],
               tick: int = 0, messages: Tuple[Message, ...] = ()) -> GameState:
    return GameState(agents=(alpha, bravo), food=Cell(*food), tick=tick,
                     messages=messages)


def launch_state(food: Tuple[int, int]) -> GameState:
    """The canonical launch layout with food placed by hand."""
    alpha = make_agent(AgentId.ALPHA, [(5, 9), (4, 9), (3, 9)], Direction.RIGHT)
    bravo = make_agent(AgentId.BRAVO, [(13, 9), (14, 9), (15, 9)], Direction.LEFT)
    return make_state(alpha, bravo, food)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def stub_rng() -> StubRng:
    return StubRng()


@pytest.fixture
def coil_alpha() -> Agent:
    # 2x2 coil: head at (5,5) having just moved left, tail directly below it.
    return make_agent(AgentId.ALPHA, [(5, 5), (6, 5), (6, 6), (5, 6)], Direction.LEFT)


@pytest.fixture
def far_bravo() -> Agent:
    return make_agent(AgentId.BRAVO, [(14, 14), (15, 14), (16, 14)], Direction.LEFT)
