"""State and snapshot dataclasses for the cooperative snake simulation."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .agent import Agent, AgentId
from .grid import BOARD_SIZE, Cell

MAX_MESSAGES = 9


@dataclass(frozen=True)
class Message:
    """One comms-log line emitted by a snake's planner."""
    tick: int
    sender: AgentId
    text: str


@dataclass(frozen=True)
class GameState:
    """
    Complete simulation state at a tick boundary.

    Replaced wholesale every tick; holders of an old GameState keep a
    stable view.
    """
    agents: Tuple[Agent, Agent]
    food: Cell
    tick: int = 0
    messages: Tuple[Message, ...] = ()

    @property
    def alpha(self) -> Agent:
        return self.agents[0]

    @property
    def bravo(self) -> Agent:
        return self.agents[1]

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format, one row per agent."""
        return [
            {
                "tick": self.tick,
                "agent_id": a.id.value,
                "head_x": a.head.x,
                "head_y": a.head.y,
                "length": len(a.body),
                "direction": a.direction.value,
                "score": a.score,
                "steps_since_food": a.steps_since_food,
                "food_x": self.food.x,
                "food_y": self.food.y,
            }
            for a in self.agents
        ]


@dataclass(frozen=True)
class CellView:
    """Render annotation for a single board cell."""
    x: int
    y: int
    agent_id: Optional[AgentId] = None
    is_head: bool = False
    is_tail: bool = False
    is_food: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Read-only projection of a GameState for an external renderer."""
    grid: Tuple[Tuple[CellView, ...], ...]  # indexed [y][x]
    food: Cell
    tick: int
    scores: Dict[AgentId, int]
    recent_messages: Tuple[Message, ...]  # most recent first

    def cell(self, x: int, y: int) -> CellView:
        return self.grid[y][x]


def snapshot(state: GameState) -> Snapshot:
    """
    Project state into per-cell annotations plus HUD data.

    Segments are painted in body order, agent by agent, so if two ever
    share a cell the later one wins.
    """
    painted: Dict[Cell, CellView] = {}
    for agent in state.agents:
        last = len(agent.body) - 1
        for i, segment in enumerate(agent.body):
            painted[segment] = CellView(
                x=segment.x, y=segment.y, agent_id=agent.id,
                is_head=(i == 0), is_tail=(i == last),
                is_food=(segment == state.food),
            )

    grid = tuple(
        tuple(
            painted.get(Cell(x, y)) or CellView(x=x, y=y, is_food=(Cell(x, y) == state.food))
            for x in range(BOARD_SIZE)
        )
        for y in range(BOARD_SIZE)
    )
    return Snapshot(
        grid=grid,
        food=state.food,
        tick=state.tick,
        scores={a.id: a.score for a in state.agents},
        recent_messages=tuple(reversed(state.messages)),
    )


def format_message(message: Message) -> str:
    """Render a comms-log line, e.g. '0012 Alpha Skipping food; optimizing coil'."""
    return f"{message.tick:04d} {message.sender.value} {message.text}"
