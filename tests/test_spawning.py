"""Rocket spawn schedule and target selection."""
import random

import pytest

from game.defense import config, spawning


@pytest.mark.parametrize(
    "round_no,expected_ms",
    [
        (1, 1850),
        (5, 1250),
        (10, 500),
        (11, 400),  # floored
        (30, 400),
    ],
)
def test_spawn_interval(round_no, expected_ms) -> None:
    assert spawning.spawn_interval_ms(round_no) == expected_ms


def test_spawn_targets_active_structure(world, rng) -> None:
    rocket = spawning.spawn_rocket(world, rng)
    assert rocket is not None
    targets = {(c.x, c.y) for c in world.cities} | {(t.x, t.y) for t in world.turrets}
    assert (rocket.end.x, rocket.end.y) in targets
    assert rocket.start.y == 0
    assert 0 <= rocket.start.x < world.width
    assert rocket.current == rocket.start
    assert rocket.speed == pytest.approx(spawning.rocket_speed(1))
    assert rocket.color == config.ROCKET_C
    assert [w.x for w in world.warnings] == [rocket.start.x]


def test_spawn_ignores_destroyed_targets(world) -> None:
    for t in world.turrets:
        t.active = False
    for c in world.cities[1:]:
        c.active = False
    survivor = world.cities[0]

    rng = random.Random(99)
    for _ in range(20):
        rocket = spawning.spawn_rocket(world, rng)
        assert (rocket.end.x, rocket.end.y) == (survivor.x, survivor.y)


def test_spawn_skipped_without_targets(world, rng) -> None:
    for s in world.turrets + world.cities:
        s.active = False
    assert spawning.spawn_rocket(world, rng) is None
    assert world.rockets == []
    assert world.warnings == []


def test_step_waits_for_threshold(world, rng) -> None:
    world.clock_ms = 10.0
    assert spawning.step(world, rng) is not None
    assert world.next_spawn_ms == pytest.approx(10.0 + 1850)

    world.clock_ms = 1860.0
    assert spawning.step(world, rng) is None
    world.clock_ms = 1860.5
    assert spawning.step(world, rng) is not None
    assert len(world.rockets) == 2


def test_step_reschedules_even_when_skipped(world, rng) -> None:
    for s in world.turrets + world.cities:
        s.active = False
    world.clock_ms = 5.0
    assert spawning.step(world, rng) is None
    assert world.next_spawn_ms == pytest.approx(5.0 + 1850)
