"""Entry point for whiteboard package."""

import argparse
import logging

from rich.console import Console
from rich.text import Text


def _outcome_text(result) -> Text:
    """Outcome line with Rich styling."""
    outcome = result.outcome
    text = Text()
    text.append(f"{outcome.cause.value.upper()}", style="bold green" if outcome.success else "bold red")
    text.append(" │ ", style="#999999")
    text.append(f"{outcome.gained_yards:+.1f} yds", style="bold")
    text.append(" │ ", style="#999999")
    text.append(outcome.message)
    return text


def main() -> None:
    """Main entry point for the whiteboard duel."""
    parser = argparse.ArgumentParser(
        description="Whiteboard - simultaneous-reveal football duel",
        prog="whiteboard",
    )
    parser.add_argument(
        "--offense",
        type=str,
        default="quick-slants",
        help="Offense play template (default: quick-slants)",
    )
    parser.add_argument(
        "--defense",
        type=str,
        default="cover-3",
        help="Defense play template (default: cover-3)",
    )
    parser.add_argument(
        "--situation",
        type=str,
        default="first-and-10",
        help="Situation id (default: first-and-10)",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Write the reveal frames to this JSON file",
    )
    parser.add_argument(
        "--api",
        action="store_true",
        help="Run the HTTP API instead of a demo reveal",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.api:
        from whiteboard.api.main import run_api

        run_api()
        return

    from whiteboard.match import create_roster, apply_play_template, validate_roster
    from whiteboard.match.situations import DEFAULT_SITUATION, down_and_distance_label, get_situation
    from whiteboard.reveal import RevealOrchestrator
    from whiteboard.reveal.core.entities import Team
    from whiteboard.reveal.export import export_reveal

    console = Console()
    situation = get_situation(args.situation) or DEFAULT_SITUATION

    players = create_roster(situation)
    players = apply_play_template(players, Team.OFFENSE, args.offense)
    players = apply_play_template(players, Team.DEFENSE, args.defense)
    validate_roster(players)

    console.print("Whiteboard Duel (Demo Mode)", style="bold")
    console.print("=" * 50)
    console.print(f"{down_and_distance_label(situation)} at the {situation.ball_spot_yard:g}")
    console.print(f"Offense: {args.offense}   Defense: {args.defense}")
    console.print()

    orchestrator = RevealOrchestrator()
    result = orchestrator.reveal(players, situation)

    for event in result.events:
        console.print(str(event), style="#666666")
    console.print()
    console.print(_outcome_text(result))
    if result.covered_target_ids:
        console.print(f"Covered: {', '.join(result.covered_target_ids)}", style="#666666")

    if args.export:
        export_reveal(result, metadata={
            "offense": args.offense,
            "defense": args.defense,
            "situation": situation.to_dict(),
        }).save(args.export)
        console.print(f"Frames written to {args.export}")


if __name__ == "__main__":
    main()
