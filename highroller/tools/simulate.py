#!/usr/bin/env python
"""
Odds and simulation tool for the highroller games.

Prints the exact return-to-player of each game's reference bet and, for any
game requested, plays simulated rounds through the real engine to compare the
observed return against the exact one.

Examples:
    # Exact RTP table only
    python -m highroller.tools.simulate

    # 10000 seeded drop-game rounds at stake 10
    python -m highroller.tools.simulate --game plinko --rounds 10000 --stake 10 --seed 7

    # Simulate every game and check the wheel entropy
    python -m highroller.tools.simulate --game all --rounds 2000 --check_wheel
"""

import argparse
import logging
import sys
from typing import List, Optional

from highroller.analysis.fairness import wheel_uniformity
from highroller.analysis.rtp import monte_carlo, rtp_table
from highroller.casino import Casino
from highroller.common.rng import SeededRandomSource, default_source
from highroller.config import CasinoConfig, load_config

GAMES = ["blackjack", "roulette", "mines", "slots", "plinko"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exact odds and Monte Carlo simulation for the highroller games"
    )
    parser.add_argument(
        "--game",
        choices=GAMES + ["all"],
        help="Game to simulate; omit to print the exact RTP table only",
    )
    parser.add_argument(
        "--rounds", type=int, default=1000, help="Number of rounds to simulate"
    )
    parser.add_argument("--stake", type=int, default=10, help="Stake for every round")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible results")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument(
        "--check_wheel",
        action="store_true",
        help="Run a chi-square uniformity check on the entropy source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every settled round"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = load_config(args.config) if args.config else CasinoConfig()
    rng = SeededRandomSource(args.seed) if args.seed is not None else default_source()

    print("Exact return to player:")
    for row in rtp_table(stake=args.stake):
        print(f"  {row['game']:<10} {row['bet']:<32} {row['rtp'] * 100:6.2f}%")

    if args.game:
        games = GAMES if args.game == "all" else [args.game]
        # Enough chips that a batch rarely needs a fresh casino
        bankroll = max(config.starting_balance, args.stake * args.rounds)
        session = CasinoConfig.from_dict({**config.to_dict(), "starting_balance": bankroll})

        print(f"\nSimulating {args.rounds} rounds at stake {args.stake}:")
        for game_id in games:
            summary = monte_carlo(
                lambda: Casino(session, rng=rng).game(game_id),
                args.rounds,
                args.stake,
            )
            interval = summary.interval
            print(
                f"  {game_id:<10} mean return {summary.mean_return * 100:6.2f}% "
                f"(95% CI {interval.lower * 100:.2f}% - {interval.upper * 100:.2f}%) "
                f"{summary.outcomes}"
            )

    if args.check_wheel:
        report = wheel_uniformity(rng, max(args.rounds, 37 * 100), config.roulette.wheel_positions)
        verdict = "PASS" if report.passed else "FAIL"
        print(f"\nWheel uniformity: chi2={report.statistic:.2f} p={report.p_value:.4f} {verdict}")
        if not report.passed:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
