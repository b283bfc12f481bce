"""Snake agents and their movement transition."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from .grid import BOARD_SIZE, Cell, Direction, step


class AgentId(Enum):
    """The two fixed snake identities. Alpha always moves first."""
    ALPHA = "Alpha"
    BRAVO = "Bravo"


COLORS = {
    AgentId.ALPHA: "#4ade80",
    AgentId.BRAVO: "#38bdf8",
}

INITIAL_LENGTH = 3


@dataclass(frozen=True)
class Agent:
    """
    Immutable snake value.

    `body` runs head first, tail last. Every transition returns a new
    Agent; nothing mutates an existing one.
    """
    id: AgentId
    body: Tuple[Cell, ...]
    direction: Direction
    color: str
    score: int = 0
    steps_since_food: int = 0

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    @property
    def is_alpha(self) -> bool:
        return self.id is AgentId.ALPHA

    def __len__(self) -> int:
        return len(self.body)

    def moved(self, direction: Direction, grow: bool) -> "Agent":
        """
        Advance one cell in `direction`.

        Growing keeps the whole old body (length + 1) and scores a point;
        otherwise the tail segment is dropped and the hunger counter ticks.
        """
        new_head = step(self.head, direction)
        kept = self.body if grow else self.body[:-1]
        return replace(
            self,
            body=(new_head,) + kept,
            direction=direction,
            score=self.score + (1 if grow else 0),
            steps_since_food=0 if grow else self.steps_since_food + 1,
        )

    def __repr__(self) -> str:
        return (f"Agent(id={self.id.value}, head={tuple(self.head)}, "
                f"len={len(self.body)}, dir={self.direction.value})")


def spawn_agents() -> Tuple[Agent, Agent]:
    """
    Create the canonical launch pair, mirrored around the board centre.

    Alpha sits left of centre heading right, Bravo right of centre heading
    left, each with a straight three-segment body trailing behind it.
    """
    mid = BOARD_SIZE // 2
    alpha = Agent(
        id=AgentId.ALPHA,
        body=tuple(Cell(mid - 4 - i, mid) for i in range(INITIAL_LENGTH)),
        direction=Direction.RIGHT,
        color=COLORS[AgentId.ALPHA],
    )
    bravo = Agent(
        id=AgentId.BRAVO,
        body=tuple(Cell(mid + 4 + i, mid) for i in range(INITIAL_LENGTH)),
        direction=Direction.LEFT,
        color=COLORS[AgentId.BRAVO],
    )
    return alpha, bravo
