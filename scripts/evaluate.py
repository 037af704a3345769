#!/usr/bin/env python3
"""
Arrow Blast - Policy Evaluation Script

Play generated (or saved) levels with a scripted policy and report
win/loss statistics. Useful for tuning generator and engine settings.

Usage:
    python scripts/evaluate.py                                  # Greedy policy, 100 generated levels
    python scripts/evaluate.py --policy random --episodes 50
    python scripts/evaluate.py --levels levels/ --json          # Machine-readable output
"""
import sys
import json
import random
import argparse
import statistics
from collections import Counter
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from arrow_blast.game.arrow_blast_game import ArrowBlastGame
from arrow_blast.levels import LevelSequence
from arrow_blast.utils import configure_logging, load_config


POLICIES = ("greedy", "random")


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Arrow Blast - Evaluate scripted policies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/evaluate.py
  python scripts/evaluate.py --policy random --episodes 50
  python scripts/evaluate.py --levels levels/ --json
"""
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Override YAML config file (merged over config/default.yaml)"
    )
    parser.add_argument(
        "--policy",
        type=str,
        choices=POLICIES,
        default="greedy",
        help="Policy to play with (default: greedy)"
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=100,
        help="Number of episodes to evaluate (default: 100)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="First level seed (default: generator.seed from config)"
    )
    parser.add_argument(
        "--levels",
        type=str,
        default=None,
        help="Directory of saved levels to play instead of generated ones"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Minimal output"
    )

    return parser.parse_args()


def choose_action(game: ArrowBlastGame, policy: str, rng: random.Random) -> int:
    """Pick an action: greedy takes the first collectible arrow, random any legal action."""
    legal = game.legal_actions()
    if policy == "random":
        return rng.choice(legal)
    return legal[1] if len(legal) > 1 else 0


def play_episode(game: ArrowBlastGame, policy: str, rng: random.Random) -> dict:
    """Play one episode from the game's current state."""
    done = False
    total_reward = 0.0
    info = {}

    while not done:
        _, reward, done, info = game.step(choose_action(game, policy, rng))
        total_reward += reward

    return {
        "outcome": info.get("outcome"),
        "loss_reason": info.get("loss_reason"),
        "truncated": info.get("truncated", False),
        "score": game.get_score(),
        "steps": game.steps,
        "reward": total_reward,
    }


def evaluate_policy(config, policy: str, episodes: int, seed: int,
                    levels_dir=None, quiet: bool = False) -> dict:
    """Evaluate a policy over multiple episodes."""
    rng = random.Random(seed)
    sequence = LevelSequence.from_directory(levels_dir) if levels_dir else None

    results = []
    for ep in range(episodes):
        if sequence is not None:
            game = ArrowBlastGame(config, blueprint=sequence.current())
            sequence.advance()
        else:
            config.generator.seed = seed + ep
            game = ArrowBlastGame(config)

        result = play_episode(game, policy, rng)
        results.append(result)

        if not quiet and (ep + 1) % 10 == 0:
            print(f"Episode {ep + 1}/{episodes}: {result['outcome']} Score {result['score']}")

    scores = [r["score"] for r in results]
    outcomes = Counter(r["outcome"] for r in results)
    reasons = Counter(r["loss_reason"] for r in results if r["loss_reason"])

    return {
        "policy": policy,
        "episodes": episodes,
        "win_rate": outcomes.get("won", 0) / episodes,
        "outcomes": dict(outcomes),
        "loss_reasons": dict(reasons),
        "truncated": sum(1 for r in results if r["truncated"]),
        "scores": {
            "mean": statistics.mean(scores),
            "median": statistics.median(scores),
            "stdev": statistics.stdev(scores) if len(scores) > 1 else 0,
            "min": min(scores),
            "max": max(scores),
        },
        "mean_steps": statistics.mean(r["steps"] for r in results),
    }


def main():
    """Main entry point."""
    args = parse_args()

    if args.episodes < 1:
        print("Error: --episodes must be at least 1")
        sys.exit(1)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        if args.json:
            print(json.dumps({"error": str(e)}))
        else:
            print(f"Error: {e}")
        sys.exit(1)

    # Per-level load messages would drown the summary
    config.logging.level = "WARNING"
    configure_logging(config.logging)

    seed = args.seed if args.seed is not None else config.generator.seed

    if not args.quiet and not args.json:
        print("=" * 60)
        print("Arrow Blast - Policy Evaluation")
        print("=" * 60)
        print(f"Policy: {args.policy}")
        print(f"Levels: {args.levels or f'generated from seed {seed}'}")
        print(f"Episodes: {args.episodes}")
        print("=" * 60)

    try:
        results = evaluate_policy(
            config, args.policy, args.episodes, seed,
            levels_dir=args.levels, quiet=args.quiet or args.json
        )
    except FileNotFoundError as e:
        if args.json:
            print(json.dumps({"error": str(e)}))
        else:
            print(f"Error: {e}")
        sys.exit(1)

    if args.json:
        results["success"] = True
        print(json.dumps(results, indent=2))
    else:
        print("\n" + "=" * 60)
        print("Evaluation Results")
        print("=" * 60)
        print(f"Win Rate:     {results['win_rate']:.1%}")
        print(f"Outcomes:     {results['outcomes']}")
        print(f"Loss Reasons: {results['loss_reasons']}")
        print(f"Truncated:    {results['truncated']}")
        print(f"Mean Score:   {results['scores']['mean']:.2f}")
        print(f"Median Score: {results['scores']['median']:.2f}")
        print(f"Std Dev:      {results['scores']['stdev']:.2f}")
        print(f"Min Score:    {results['scores']['min']}")
        print(f"Max Score:    {results['scores']['max']}")
        print(f"Mean Steps:   {results['mean_steps']:.1f}")
        print("=" * 60)


if __name__ == "__main__":
    main()
