"""Milestone refills, round advancement and terminal conditions."""
from game.defense import progression
from game.defense.entities import GameMode, MatchState

from helpers import make_rocket


def drain(world, ammo: int = 0) -> None:
    for t in world.turrets:
        t.ammo = ammo


class TestUniverseRefill:
    def test_fires_once_per_match(self, world) -> None:
        drain(world, 3)
        world.score = 500
        assert progression.universe_refill(world) is True
        assert [t.ammo for t in world.turrets] == [20, 40, 20]
        assert world.universe_mode

        drain(world, 3)
        world.score = 520
        assert progression.universe_refill(world) is False
        assert [t.ammo for t in world.turrets] == [3, 3, 3]

    def test_below_threshold(self, world) -> None:
        world.score = 480
        assert progression.universe_refill(world) is False
        assert not world.refilled_at_universe

    def test_skips_destroyed_turrets(self, world) -> None:
        drain(world, 0)
        world.turrets[2].active = False
        world.score = 500
        progression.universe_refill(world)
        assert [t.ammo for t in world.turrets] == [20, 40, 0]
        texts = [t.text for t in world.floating_texts]
        assert texts.count("AMMO REFILLED!") == 2
        assert "UNIVERSE MODE ACTIVATED!" in texts


class TestEndlessRefill:
    def test_fires_on_each_multiple_once(self, world) -> None:
        world.mode = GameMode.ENDLESS
        world.refilled_at_universe = True
        world.last_refill_score = 800
        drain(world, 1)

        world.score = 1600
        assert progression.endless_refill(world) is True
        assert [t.ammo for t in world.turrets] == [20, 40, 20]
        assert world.last_refill_score == 1600

        # score has not moved since the refill
        drain(world, 1)
        assert progression.endless_refill(world) is False
        assert [t.ammo for t in world.turrets] == [1, 1, 1]

        world.score = 1620
        assert progression.endless_refill(world) is False

        world.score = 2400
        assert progression.endless_refill(world) is True

    def test_classic_mode_never_refills(self, world) -> None:
        world.mode = GameMode.CLASSIC
        world.score = 800
        drain(world, 0)
        assert progression.endless_refill(world) is False
        assert all(t.ammo == 0 for t in world.turrets)

    def test_zero_score_is_not_a_multiple(self, world) -> None:
        world.mode = GameMode.ENDLESS
        world.last_refill_score = -1
        assert progression.endless_refill(world) is False


class TestRoundAdvance:
    def test_advances_when_dry_and_quiet(self, world) -> None:
        drain(world, 0)
        world.turrets[0].active = False
        assert progression.advance_round(world) is True
        assert world.round == 2
        assert [t.ammo for t in world.turrets] == [0, 40, 20]

    def test_waits_for_rockets(self, world) -> None:
        drain(world, 0)
        make_rocket(world, start=(100, 0), end=(300, 560))
        assert progression.advance_round(world) is False
        assert world.round == 1

    def test_waits_for_all_ammo(self, world) -> None:
        drain(world, 0)
        world.turrets[2].ammo = 1
        world.turrets[2].active = False  # wreckage still holding ammo blocks the round
        assert progression.advance_round(world) is False


class TestTerminalState:
    def test_classic_win(self, world) -> None:
        world.mode = GameMode.CLASSIC
        world.score = 1000
        assert progression.terminal_state(world) is MatchState.WON

    def test_endless_has_no_win(self, world) -> None:
        world.mode = GameMode.ENDLESS
        world.score = 5000
        assert progression.terminal_state(world) is None

    def test_loss_when_all_turrets_gone(self, world) -> None:
        for t in world.turrets:
            t.active = False
        assert progression.terminal_state(world) is MatchState.LOST

    def test_cities_do_not_matter(self, world) -> None:
        for c in world.cities:
            c.active = False
        assert progression.terminal_state(world) is None
