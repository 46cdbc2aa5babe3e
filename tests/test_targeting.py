"""Click resolution: nearest eligible turret fires."""
from game.defense import config, targeting
from game.defense.entities import Point


def test_center_turret_fires_when_sides_are_dry(world) -> None:
    left, center, right = world.turrets
    left.ammo = 0
    right.ammo = 0
    center.ammo = 5

    inter = targeting.launch(world, 150, 200)

    assert inter is not None
    assert center.ammo == 4
    assert world.interceptors == [inter]
    assert inter.start == Point(300, 560)
    assert inter.target == Point(150, 200)
    assert inter.current == Point(300, 560)
    assert inter.speed == config.INTERCEPTOR_SPEED
    assert inter.turret_index == 1
    assert world.launches == 1


def test_nearest_turret_wins(world) -> None:
    assert targeting.nearest_turret(world, 150, 200) == 0
    assert targeting.nearest_turret(world, 310, 400) == 1
    assert targeting.nearest_turret(world, 590, 10) == 2


def test_inactive_and_empty_turrets_are_skipped(world) -> None:
    world.turrets[0].active = False
    world.turrets[1].ammo = 0
    assert targeting.nearest_turret(world, 60, 500) == 2


def test_tie_goes_to_lowest_index(world) -> None:
    world.turrets[1].ammo = 0
    assert targeting.nearest_turret(world, 300, 100) == 0


def test_no_eligible_turret_is_a_noop(world) -> None:
    for t in world.turrets:
        t.ammo = 0
    assert targeting.launch(world, 100, 100) is None
    assert world.interceptors == []
    assert all(t.ammo == 0 for t in world.turrets)


def test_ammo_never_goes_negative(world) -> None:
    for t in world.turrets:
        t.ammo = 1
    launched = [targeting.launch(world, 300, 100) for _ in range(5)]
    assert sum(1 for i in launched if i is not None) == 3
    assert all(t.ammo == 0 for t in world.turrets)
