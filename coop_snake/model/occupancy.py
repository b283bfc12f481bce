"""Per-tick occupancy index for the cooperative snake simulation."""

from typing import Dict, Iterable, List, NamedTuple, Optional

from .agent import Agent, AgentId
from .grid import Cell, free_cells


class Occupant(NamedTuple):
    agent_id: AgentId
    is_tail: bool


class OccupancyIndex:
    """
    Mapping from cell to the snake segment standing on it.

    Rebuilt from the authoritative bodies at the start of every tick and
    then updated in place as each snake's move is applied, so a snake that
    moves later in the tick sees where the earlier one went. Discarded once
    the tick is resolved.
    """

    def __init__(self) -> None:
        self._cells: Dict[Cell, Occupant] = {}

    @classmethod
    def build(cls, agents: Iterable[Agent]) -> "OccupancyIndex":
        """Index every segment of every agent, flagging each tail."""
        index = cls()
        for agent in agents:
            last = len(agent.body) - 1
            for i, segment in enumerate(agent.body):
                index.claim(segment, agent.id, is_tail=(i == last))
        return index

    def get(self, cell: Cell) -> Optional[Occupant]:
        return self._cells.get(cell)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def claim(self, cell: Cell, agent_id: AgentId, is_tail: bool) -> None:
        """Mark cell as occupied by agent_id."""
        self._cells[cell] = Occupant(agent_id, is_tail)

    def vacate(self, cell: Cell) -> None:
        """Remove any entry for cell."""
        self._cells.pop(cell, None)

    def allows_entry(self, cell: Cell, agent_id: AgentId, growing: bool) -> bool:
        """
        Check if agent_id may move its head onto cell.

        Empty cells are always enterable. The mover's own tail is enterable
        because it is vacated by the same move, unless the move grows the
        snake and the tail therefore stays put.
        """
        occupant = self._cells.get(cell)
        if occupant is None:
            return True
        return occupant.agent_id is agent_id and occupant.is_tail and not growing

    def free_cells(self) -> List[Cell]:
        """All board cells with no entry, row by row."""
        return free_cells(self._cells)
