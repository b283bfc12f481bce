"""Summary report generation for the cooperative snake simulation."""

from typing import Dict, List, Optional, TYPE_CHECKING
from pathlib import Path

from ..model.state import format_message

if TYPE_CHECKING:
    from ..model.engine import Collision
    from ..model.state import GameState


class Reporter:
    """Accumulates run statistics tick by tick and renders a text report."""

    def __init__(self, config_path: str, seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.ticks = 0
        self.peak_lengths: Dict[str, int] = {}
        self.peak_scores: Dict[str, int] = {}
        self.collisions: List["Collision"] = []
        self.longest_run = 0
        self._current_run = 0

    def update(self, state: "GameState",
               collision: Optional["Collision"] = None) -> None:
        """Accumulate stats for one tick."""
        self.ticks += 1
        if collision is not None:
            self.collisions.append(collision)
            self._current_run = 0
        else:
            self._current_run += 1
            self.longest_run = max(self.longest_run, self._current_run)

        for agent in state.agents:
            name = agent.id.value
            self.peak_lengths[name] = max(self.peak_lengths.get(name, 0), len(agent.body))
            self.peak_scores[name] = max(self.peak_scores.get(name, 0), agent.score)

    def resets_by_cause(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for c in self.collisions:
            key = f"{c.agent_id.value}/{c.kind.value}"
            counts[key] = counts.get(key, 0) + 1
        return counts

    def generate_summary(self, final_state: "GameState",
                         output_dir: Path,
                         csv_enabled: bool) -> str:
        """Returns formatted text report."""
        lines = [
            "",
            "=" * 80,
            "                  COOPERATIVE DUAL SNAKE RUN REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "RUN METRICS",
            "-" * 40,
            f"Ticks Simulated:       {self.ticks}",
            f"Resets:                {len(self.collisions)}",
            f"Longest Survival:      {self.longest_run} ticks",
            f"Final Tick Counter:    {final_state.tick}",
        ]

        for agent in final_state.agents:
            name = agent.id.value
            lines.append(
                f"{name + ':':<23}score {agent.score} (peak {self.peak_scores.get(name, 0)}), "
                f"length {len(agent.body)} (peak {self.peak_lengths.get(name, 0)})"
            )

        lines += ["", "RESETS BY CAUSE", "-" * 40]
        causes = self.resets_by_cause()
        if causes:
            for key in sorted(causes):
                lines.append(f"{key:<23}{causes[key]}")
        else:
            lines.append("(none)")

        lines += ["", "COMMS (latest first)", "-" * 40]
        messages = list(reversed(final_state.messages))
        lines.extend(format_message(m) for m in messages)
        if not messages:
            lines.append("(empty)")

        lines += ["", "OUTPUT FILES", "-" * 40]
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        lines.append("=" * 80)
        return "\n".join(lines)
