#!/usr/bin/env python3
"""
Demo script for BAR-latro.
Shows hand evaluation, scoring and auto-played rounds.
"""

import argparse
import logging
import random

from .campaign import Campaign
from .engine.deck import Card
from .engine.hand_evaluator import evaluate
from .engine.scoring import score
from .presets import list_presets


def demo_hand_evaluation():
    """Demonstrate hand evaluation and scoring."""
    print("=" * 60)
    print("HAND EVALUATION DEMO")
    print("=" * 60)

    test_hands = [
        "Ks Kh 5c",
        "As Ah Ad Kc Ks",
        "2h 4h 6h 8h 10h",
        "Ac 2d 3s 4h 5c",
        "10h Jh Qh Kh Ah",
        "7c 7d 9s 9h Qd",
    ]

    for text in test_hands:
        cards = [Card.parse(part) for part in text.split()]
        evaluation = evaluate(cards)
        result = score(evaluation.hand_rank, evaluation.cards)
        print(f"\nCards: {', '.join(str(c) for c in cards)}")
        print(f"  Hand: {evaluation.hand_rank.label} ({evaluation.description})")
        print(f"  Scoring cards: {', '.join(str(c) for c in evaluation.cards)}")
        print(f"  Strength: {evaluation.strength}")
        print(f"  Score: {result.formatted}")


def demo_rounds(campaign: Campaign, rounds: int) -> int:
    """Auto-play up to `rounds` rounds. Returns the number of rounds won."""
    print("\n" + "=" * 60)
    print(f"AUTO-PLAY ({rounds} rounds)")
    print("=" * 60)

    won = 0
    for _ in range(rounds):
        info = campaign.start_next_round()
        campaign.deal()
        result = campaign.auto_play()

        print(f"\nRound {info.number} - {info.difficulty}")
        print(f"  Goal: {result.goal:,}")
        print(f"  Score: {result.score:,}")
        print(f"  {'✓ VICTORY' if result.success else '✗ DEFEAT'}")
        print(f"  Hands: {result.hands_used}, Discards: {result.discards_used}")
        print(f"  Plays: {', '.join(f'{h}:{s:,}' for h, s in result.hands_played)}")

        if not result.success:
            break
        won += 1

    summary = campaign.history.summary()
    print("\n" + "=" * 60)
    print(f"Rounds won: {won}/{rounds}")
    if summary["best_hand"]:
        print(f"Best hand: {summary['best_hand']} ({summary['best_hand_points']:,} points)")
    return won


def main(argv: list[str] = None) -> int:
    parser = argparse.ArgumentParser(description="BAR-latro demo")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--preset", choices=list_presets(), default="standard", help="Config preset")
    parser.add_argument("--rounds", type=int, default=3, help="Rounds to auto-play")
    parser.add_argument("--history", type=str, help="Save play history JSON to this path")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    demo_hand_evaluation()

    campaign = Campaign.from_preset(args.preset, rng=random.Random(args.seed))
    demo_rounds(campaign, args.rounds)

    if args.history:
        campaign.history.save(args.history)
        print(f"History saved to {args.history}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
