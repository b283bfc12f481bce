import numpy as np
import pytest

from coop_snake.config import SimulationConfig
from coop_snake.model.agent import AgentId, spawn_agents
from coop_snake.model.engine import (CollisionKind, SimulationEngine, advance,
                                     initialize, resolve_tick)
from coop_snake.model.grid import BOARD_SIZE, Cell, Direction, in_bounds
from coop_snake.model.state import MAX_MESSAGES, Message

from conftest import StubRng, launch_state, make_agent, make_state


def _assert_launch_layout(state):
    assert state.agents == spawn_agents()
    assert state.tick == 0
    assert state.messages == ()
    assert state.food not in state.alpha.body + state.bravo.body


def test_initialize_launch_layout(rng):
    state = initialize(rng)
    _assert_launch_layout(state)

    mid = BOARD_SIZE // 2
    assert state.alpha.body == (Cell(mid - 4, mid), Cell(mid - 5, mid), Cell(mid - 6, mid))
    assert state.bravo.body == (Cell(mid + 4, mid), Cell(mid + 5, mid), Cell(mid + 6, mid))
    assert state.alpha.direction is Direction.RIGHT
    assert state.bravo.direction is Direction.LEFT
    assert in_bounds(state.food)


def test_initialize_draws_food_from_free_cells(stub_rng):
    state = initialize(stub_rng)
    assert state.food == Cell(0, 0)
    assert stub_rng.calls == [(0, BOARD_SIZE * BOARD_SIZE - 6)]


def test_first_tick_moves_heads_toward_centre(stub_rng):
    state = launch_state(food=(0, 9))
    nxt = advance(state, stub_rng)

    assert nxt.tick == 1
    assert nxt.alpha.head == Cell(6, 9)
    assert nxt.bravo.head == Cell(12, 9)
    for before, after in zip(state.agents, nxt.agents):
        assert len(after.body) == len(before.body)
        assert after.score == 0
        assert after.steps_since_food == 1
    assert nxt.food == Cell(0, 9)
    assert stub_rng.calls == []
    assert nxt.messages == (
        Message(1, AgentId.ALPHA, "Moving for food (0,9) in 5 steps"),
        Message(1, AgentId.BRAVO, "Alpha on food; condensing tail"),
    )


def test_alpha_eats_adjacent_food(stub_rng):
    state = launch_state(food=(6, 9))
    nxt = advance(state, stub_rng)

    assert nxt.tick == 1
    assert nxt.alpha.score == 1
    assert len(nxt.alpha.body) == 4
    assert nxt.alpha.steps_since_food == 0
    assert nxt.alpha.body == (Cell(6, 9), Cell(5, 9), Cell(4, 9), Cell(3, 9))
    assert nxt.bravo.score == 0
    # respawned on the first free cell the stub picks
    assert nxt.food == Cell(0, 0)
    assert nxt.food not in nxt.alpha.body + nxt.bravo.body
    assert nxt.messages[0].text == "Moving for food (6,9) in 1 steps"


def test_respawned_food_avoids_occupied_cells():
    state = launch_state(food=(6, 9))
    for seed in range(20):
        nxt = advance(state, np.random.default_rng(seed))
        assert nxt.alpha.score == 1
        assert nxt.food not in nxt.alpha.body
        assert nxt.food not in state.bravo.body


def test_stepping_onto_own_vacating_tail_is_allowed(coil_alpha, far_bravo):
    state = make_state(coil_alpha, far_bravo, food=(12, 14))
    outcome = resolve_tick(state, StubRng())

    assert outcome.collision is None
    nxt = outcome.state
    assert nxt.tick == 1
    assert nxt.alpha.head == Cell(5, 6)
    assert nxt.alpha.body == (Cell(5, 6), Cell(5, 5), Cell(6, 5), Cell(6, 6))
    assert nxt.bravo.head == Cell(13, 14)
    assert [m.text for m in nxt.messages] == [
        "Skipping food; optimizing coil",
        "Food is open; intercepting in 2 steps",
    ]


def test_eating_onto_own_tail_is_a_self_collision(coil_alpha, far_bravo, rng):
    state = make_state(coil_alpha, far_bravo, food=(5, 6))
    outcome = resolve_tick(state, rng)

    assert outcome.collision is not None
    assert outcome.collision.kind is CollisionKind.SELF
    assert outcome.collision.agent_id is AgentId.ALPHA
    assert outcome.collision.cell == Cell(5, 6)
    _assert_launch_layout(outcome.state)


def test_wall_collision_resets(rng):
    alpha = make_agent(AgentId.ALPHA, [(0, 0), (1, 0), (1, 1)], Direction.LEFT, score=4)
    bravo = make_agent(AgentId.BRAVO, [(0, 1), (0, 2), (0, 3)], Direction.UP, score=2)
    state = make_state(alpha, bravo, food=(10, 10), tick=57)

    outcome = resolve_tick(state, rng)
    assert outcome.collision.kind is CollisionKind.WALL
    assert outcome.collision.cell == Cell(-1, 0)
    _assert_launch_layout(outcome.state)
    assert all(a.score == 0 for a in outcome.state.agents)


def test_partner_collision_resets(rng):
    alpha = make_agent(AgentId.ALPHA, [(0, 1), (0, 2), (0, 3)], Direction.UP)
    bravo = make_agent(AgentId.BRAVO, [(2, 1), (1, 1), (1, 0), (0, 0)], Direction.RIGHT)
    state = make_state(alpha, bravo, food=(10, 10), tick=3)

    outcome = resolve_tick(state, rng)
    assert outcome.collision.kind is CollisionKind.PARTNER
    assert outcome.collision.agent_id is AgentId.ALPHA
    assert outcome.collision.cell == Cell(0, 0)
    _assert_launch_layout(advance(state, rng))


def test_second_mover_collision_discards_first_move(rng):
    alpha = make_agent(AgentId.ALPHA, [(0, 2), (0, 3), (0, 4)], Direction.UP, score=2)
    bravo = make_agent(AgentId.BRAVO, [(0, 0), (1, 0), (1, 1), (1, 2)], Direction.LEFT)
    state = make_state(alpha, bravo, food=(10, 10), tick=8)

    outcome = resolve_tick(state, rng)
    # Alpha moves up to (0,1), which leaves Bravo boxed in against the wall.
    assert outcome.collision.agent_id is AgentId.BRAVO
    assert outcome.collision.kind is CollisionKind.WALL
    assert outcome.collision.cell == Cell(-1, 0)
    _assert_launch_layout(outcome.state)
    assert Cell(0, 1) not in outcome.state.alpha.body


def test_second_mover_plans_against_respawned_food():
    stub = StubRng()
    nxt = advance(launch_state(food=(6, 9)), stub)

    # Respawn excludes Alpha's grown body and Bravo's unmoved one.
    assert stub.calls == [(0, BOARD_SIZE * BOARD_SIZE - 7)]
    assert nxt.food == Cell(0, 0)
    assert nxt.messages[-1] == Message(1, AgentId.BRAVO, "Alpha on food; condensing tail")
    assert nxt.bravo.head == Cell(12, 9)
    assert nxt.bravo.score == 0


def test_message_log_keeps_most_recent_entries(stub_rng):
    old = tuple(Message(0, AgentId.ALPHA, f"m{i}") for i in range(MAX_MESSAGES))
    state = launch_state(food=(0, 9))
    state = make_state(state.alpha, state.bravo, food=(0, 9), messages=old)

    nxt = advance(state, stub_rng)
    assert len(nxt.messages) == MAX_MESSAGES
    assert [m.text for m in nxt.messages[:-2]] == [f"m{i}" for i in range(2, MAX_MESSAGES)]
    assert [m.sender for m in nxt.messages[-2:]] == [AgentId.ALPHA, AgentId.BRAVO]


def test_advance_does_not_touch_input_state(stub_rng):
    state = launch_state(food=(6, 9))
    before = (state.agents, state.food, state.tick, state.messages)
    advance(state, stub_rng)
    assert (state.agents, state.food, state.tick, state.messages) == before


def test_advance_without_rng_uses_default_generator():
    nxt = advance(launch_state(food=(6, 9)))
    assert nxt.alpha.score == 1
    assert in_bounds(nxt.food)


def _run(seed, ticks):
    rng = np.random.default_rng(seed)
    state = initialize(rng)
    history = [state]
    for _ in range(ticks):
        state = advance(state, rng)
        history.append(state)
    return history


def test_same_seed_replays_identically():
    first = _run(seed=99, ticks=300)
    second = _run(seed=99, ticks=300)
    assert [(s.agents, s.food, s.messages) for s in first] == \
        [(s.agents, s.food, s.messages) for s in second]


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_invariants_hold_over_long_runs(seed):
    rng = np.random.default_rng(seed)
    state = initialize(rng)
    for _ in range(800):
        outcome = resolve_tick(state, rng)
        nxt = outcome.state

        seen = set()
        for agent in nxt.agents:
            assert len(agent.body) >= 1
            assert all(in_bounds(c) for c in agent.body)
            assert len(set(agent.body)) == len(agent.body)
            assert seen.isdisjoint(agent.body)
            seen.update(agent.body)
        assert len(nxt.messages) <= MAX_MESSAGES

        if outcome.collision is None:
            assert nxt.tick == state.tick + 1
            for before, after in zip(state.agents, nxt.agents):
                gained = after.score - before.score
                assert gained in (0, 1)
                if gained:
                    assert len(after.body) == len(before.body) + 1
                    assert after.steps_since_food == 0
                else:
                    assert len(after.body) == len(before.body)
                    assert after.steps_since_food == before.steps_since_food + 1
            if nxt.alpha.score > state.alpha.score:
                assert nxt.alpha.head == state.food
        else:
            _assert_launch_layout(nxt)
        state = nxt


def test_simulation_engine_counts_ticks_and_resets():
    engine = SimulationEngine(SimulationConfig(max_steps=4, seed=5))
    while not engine.is_finished():
        engine.step()
    assert engine.current_step == 4

    alpha = make_agent(AgentId.ALPHA, [(0, 0), (1, 0), (1, 1)], Direction.LEFT)
    bravo = make_agent(AgentId.BRAVO, [(0, 1), (0, 2), (0, 3)], Direction.UP)
    engine.state = make_state(alpha, bravo, food=(10, 10), tick=12)
    state = engine.step()

    assert engine.last_collision.kind is CollisionKind.WALL
    assert engine.resets[CollisionKind.WALL] == 1
    assert state.tick == 0
    summary = engine.get_summary()
    assert summary['total_steps'] == 5
    assert summary['total_resets'] == 1
    assert summary['resets_by_cause']['wall'] == 1


def test_simulation_engine_tracks_food():
    engine = SimulationEngine(SimulationConfig(max_steps=1, seed=5))
    engine.state = launch_state(food=(6, 9))
    engine.step()
    assert engine.foods_eaten == 1
    assert engine.best_score == 1

    engine.reset()
    assert engine.state.agents == spawn_agents()
    assert engine.snapshot().tick == 0
