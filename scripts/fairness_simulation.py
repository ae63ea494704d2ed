#!/usr/bin/env python3
"""Fairness simulation for policy tuning.

Runs the real imposter picker through many synthetic rounds and prints
pick balance, max streak and pair repeats for the chosen policy. With
--sweep, grid-searches the main weights instead and ranks combinations.

Usage:
    uv run python scripts/fairness_simulation.py --players 6 --rounds 200

    # Named players, two imposters, reproducible
    uv run python scripts/fairness_simulation.py --names Ana,Ben,Cem,Dia,Eli --imposters 2 --seed 42

    # Start from the party preset and override one knob
    uv run python scripts/fairness_simulation.py --preset party --max-consecutive 1

    # Grid search
    uv run python scripts/fairness_simulation.py --sweep --alphas 0.2,0.4,0.6 --seed 7

See src/imposter_fairness/parameters.py for parameter documentation.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from imposter_fairness.models.policy import FairnessPolicy
from imposter_fairness.testing.simulator import FairnessSimulator
from imposter_fairness.testing.sweep import (
    DEFAULT_ALPHAS,
    DEFAULT_BETAS,
    DEFAULT_GAMMAS,
    DEFAULT_MAX_CONSECUTIVES,
    run_sweep,
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# CLI flag -> policy field
POLICY_FLAGS = {
    "max_consecutive": int,
    "min_cooldown_rounds": int,
    "recent_window": int,
    "pair_recent_window": int,
    "alpha_frequency_penalty": float,
    "beta_distance_bonus": float,
    "gamma_pair_penalty": float,
    "pair_penalty_decay": float,
    "new_player_hard_cooldown_rounds": int,
    "new_player_soft_penalty_rounds": int,
    "new_player_penalty_factor": float,
    "jitter_percent": float,
}


def parse_float_list(value: str) -> list[float]:
    """Parse '0.1,0.2' into [0.1, 0.2]."""
    return [float(v) for v in value.split(",") if v.strip()]


def parse_int_list(value: str) -> list[int]:
    """Parse '1,2' into [1, 2]."""
    return [int(v) for v in value.split(",") if v.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run imposter fairness simulation")
    roster = parser.add_mutually_exclusive_group()
    roster.add_argument("--players", type=int, default=6,
                        help="Number of anonymous players (default: 6)")
    roster.add_argument("--names", type=str, default=None,
                        help="Comma-separated player names (overrides --players)")
    parser.add_argument("--imposters", type=int, default=1,
                        help="Imposters per round (default: 1)")
    parser.add_argument("--rounds", type=int, default=200,
                        help="Rounds to simulate (default: 200)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducibility")
    parser.add_argument("--preset", choices=["default", "party"], default="default",
                        help="Base policy (default: default)")
    for name, kind in POLICY_FLAGS.items():
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=kind, default=None,
                            help=f"Override policy {name}")

    parser.add_argument("--sweep", action="store_true",
                        help="Grid-search weights instead of a single run")
    parser.add_argument("--alphas", type=parse_float_list, default=list(DEFAULT_ALPHAS))
    parser.add_argument("--betas", type=parse_float_list, default=list(DEFAULT_BETAS))
    parser.add_argument("--gammas", type=parse_float_list, default=list(DEFAULT_GAMMAS))
    parser.add_argument("--max-consecutives", type=parse_int_list,
                        default=list(DEFAULT_MAX_CONSECUTIVES))
    parser.add_argument("--top", type=int, default=10,
                        help="Sweep rows to print (default: 10)")

    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Errors only")
    return parser


def build_policy(args: argparse.Namespace) -> FairnessPolicy:
    """Base preset plus any per-field overrides given on the command line."""
    policy = FairnessPolicy.party_preset() if args.preset == "party" else FairnessPolicy.default()
    overrides = {
        name: getattr(args, name)
        for name in POLICY_FLAGS
        if getattr(args, name) is not None
    }
    return policy.with_overrides(**overrides) if overrides else policy


def player_names(args: argparse.Namespace) -> list[str]:
    if args.names:
        return [name.strip() for name in args.names.split(",") if name.strip()]
    return [f"Player {i + 1}" for i in range(max(0, args.players))]


def main(argv: Optional[list[str]] = None) -> int:
    """Run the simulation or sweep. Returns a process exit code."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)
    else:
        logging.getLogger("imposter_fairness").setLevel(logging.INFO)

    names = player_names(args)
    if len(names) < 2:
        print("Need at least 2 players", file=sys.stderr)
        return 2

    policy = build_policy(args)

    if args.sweep:
        seed = args.seed if args.seed is not None else 0
        results = run_sweep(
            names,
            args.imposters,
            args.rounds,
            seed,
            alphas=args.alphas,
            betas=args.betas,
            gammas=args.gammas,
            max_consecutives=args.max_consecutives,
            base_policy=policy,
        )
        if args.json:
            print(json.dumps([
                {
                    "params": r.param_str,
                    "passes_all": r.passes_all,
                    "pick_spread": r.pick_spread,
                    "max_streak": r.max_streak,
                    "pair_repeat_rate": round(r.pair_repeat_rate, 4),
                    "failed_checks": r.failed_checks,
                }
                for r in results
            ], indent=2))
        else:
            print(f"{'PARAMS':<48} {'SPREAD':>6} {'STREAK':>6} {'PAIRS':>6}  STATUS")
            for r in results[:args.top]:
                status = "PASS" if r.passes_all else "; ".join(r.failed_checks)
                print(f"{r.param_str:<48} {r.pick_spread:>6} {r.max_streak:>6} "
                      f"{r.pair_repeat_rate:>6.2f}  {status}")
            passing = sum(r.passes_all for r in results)
            print(f"\n{passing}/{len(results)} combinations pass all criteria")
        return 0

    result = FairnessSimulator.run_simulation(
        names, args.imposters, args.rounds, policy, seed=args.seed
    )
    if args.json:
        print(result.to_json())
    else:
        print("\n=== Fairness Simulation Results ===")
        print(result.format_summary(policy))
        print("===================================")
    return 0


if __name__ == "__main__":
    sys.exit(main())
