"""Ground impacts, detonations, explosion lifecycle and chain reactions."""
import pytest

from game.defense import collisions, config, kinematics
from game.defense.entities import Interceptor, Point

from helpers import make_explosion, make_rocket


class TestGroundImpact:
    def test_kill_strip_is_horizontal_only(self, world, rng) -> None:
        city = world.cities[0]
        near = make_rocket(world, start=(city.x, 0), end=(city.x + 24, 560), current=(city.x + 24, 560))
        collisions.resolve_ground_impacts(world, [near], rng)
        assert city.active is False
        assert world.impacts == 1

    def test_outside_strip_survives(self, world, rng) -> None:
        city = world.cities[0]
        far = make_rocket(world, start=(city.x, 0), end=(city.x + 26, 560), current=(city.x + 26, 560))
        collisions.resolve_ground_impacts(world, [far], rng)
        assert city.active is True

    def test_impact_effects(self, world, rng) -> None:
        rocket = make_rocket(world, start=(450, 0), end=(450, 560), current=(450, 561))
        collisions.resolve_ground_impacts(world, [rocket], rng)
        assert world.rockets == []
        assert len(world.particles) == config.IMPACT_PARTICLES
        assert world.shake == config.IMPACT_SHAKE
        explosion = world.explosions[0]
        assert explosion.pos == Point(450, 561)
        assert explosion.radius == config.EXPLOSION_START_RADIUS
        assert explosion.growing

    def test_destroyed_stays_destroyed(self, world, rng) -> None:
        turret = world.turrets[0]
        turret.active = False
        rocket = make_rocket(world, start=(0, 0), end=(turret.x, 560), current=(turret.x, 560))
        collisions.resolve_ground_impacts(world, [rocket], rng)
        assert turret.active is False
        assert turret.x == 60  # wreckage keeps its place


def test_interceptor_detonates_at_click_point(world) -> None:
    inter = Interceptor(
        id=world.next_id(),
        start=Point(300, 560),
        target=Point(150, 200),
        current=Point(148.0, 196.0),  # overshot
        speed=9.0,
        turret_index=1,
    )
    world.interceptors.append(inter)
    collisions.resolve_detonations(world, [inter])
    assert world.interceptors == []
    explosion = world.explosions[0]
    assert explosion.pos == Point(150, 200)
    assert explosion.max_radius == config.EXPLOSION_MAX_RADIUS == 75


def test_explosion_kills_rocket_and_chains(world, rng) -> None:
    make_explosion(world, (150, 200), radius=40)
    rocket = make_rocket(world, start=(180, 0), end=(180, 560), current=(180, 200))

    collisions.resolve_explosions(world, rng)

    assert rocket not in world.rockets
    assert world.score == config.ROCKET_SCORE
    assert world.kills == 1
    assert [t.text for t in world.floating_texts] == ["+20"]
    assert len(world.particles) == config.KILL_PARTICLES
    assert len(world.explosions) == 2
    chained = world.explosions[1]
    assert chained.pos == Point(180, 200)
    assert chained.max_radius == config.EXPLOSION_MAX_RADIUS
    assert chained.growing


def test_rocket_outside_radius_survives(world, rng) -> None:
    make_explosion(world, (150, 200), radius=10)
    rocket = make_rocket(world, start=(180, 0), end=(180, 560), current=(180, 200))
    collisions.resolve_explosions(world, rng)
    assert world.rockets == [rocket]
    assert world.score == 0


def test_chain_reaction_cascades_on_next_tick(world, rng) -> None:
    make_explosion(world, (100, 100), radius=40)
    make_rocket(world, start=(141, 0), end=(141, 560), current=(141, 100))
    second = make_rocket(world, start=(144, 0), end=(144, 560), current=(144, 100))

    collisions.resolve_explosions(world, rng)
    assert world.rockets == [second]
    assert world.score == 20

    collisions.resolve_explosions(world, rng)
    assert world.rockets == []
    assert world.score == 40


def test_landing_rocket_is_an_impact_not_a_kill(world, rng) -> None:
    make_explosion(world, (300, 555), radius=40)
    rocket = make_rocket(world, start=(300, 0), end=(300, 560), current=(300, 559))

    landed, detonated = kinematics.step(world)
    assert landed == [rocket]
    collisions.step(world, landed, detonated, rng)

    assert world.impacts == 1
    assert world.kills == 0
    assert world.score == 0


def test_explosion_radius_stays_bounded(world, rng) -> None:
    explosion = make_explosion(world, (300, 300), radius=2)
    radii = []
    for _ in range(300):
        if explosion not in world.explosions:
            break
        was_growing = explosion.growing
        before = explosion.radius
        collisions.resolve_explosions(world, rng)
        assert 0 <= explosion.radius <= explosion.max_radius
        if was_growing:
            assert explosion.radius >= before
        else:
            assert explosion.radius <= before
        radii.append(explosion.radius)
    else:
        pytest.fail("explosion never expired")

    assert max(radii) == explosion.max_radius
    assert explosion.alpha <= 0 or explosion.radius <= 0


def test_shrinking_explosion_fades(world, rng) -> None:
    explosion = make_explosion(world, (300, 300), radius=75, growing=False)
    collisions.resolve_explosions(world, rng)
    assert explosion.radius == pytest.approx(75 - config.EXPLOSION_SPEED * config.EXPLOSION_SHRINK_FACTOR)
    assert explosion.alpha == pytest.approx(1 - config.EXPLOSION_FADE)
