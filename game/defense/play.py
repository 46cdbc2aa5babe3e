"""
Interactive play loop

    python -m game.defense.play --mode endless
"""

import argparse
import logging

import arcade

from .highscore import HighScoreBook, JsonFileStore
from .render import DefenseWindow
from .simulation import DefenseSimulation


def main():
    parser = argparse.ArgumentParser(description="Play the missile defense game")
    parser.add_argument(
        "--mode",
        type=str,
        default="classic",
        choices=["classic", "endless"],
        help="Game mode to start with (default: classic)",
    )
    parser.add_argument("--width", type=int, default=800, help="Play field width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Play field height (default: 600)")
    parser.add_argument(
        "--scores",
        type=str,
        default="./high_scores.json",
        help="JSON file holding the high score (default: ./high_scores.json)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log simulation events")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    sim = DefenseSimulation(
        width=args.width,
        height=args.height,
        high_scores=HighScoreBook(JsonFileStore(args.scores)),
    )
    window = DefenseWindow(sim)
    sim.start_game(args.mode)
    window.pending_mode = sim.mode
    print(f"High score: {sim.high_score}. Click to fire, R returns to the menu.")
    arcade.run()


if __name__ == "__main__":
    main()
