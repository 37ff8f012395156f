"""
Challonge client — command-line entry point.

Usage:
    uv run python main.py show my-bracket
    uv run python main.py create "Friday Night" friday_night --type double
    uv run python main.py add my-bracket "Alice" --misc discord:1234
    uv run python main.py start my-bracket
    uv run python main.py report my-bracket 12345 3-1 Alice
    uv run python main.py remove my-bracket "Alice"

Wires together:  config → logging → Client → operation → Rich display
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path

from rich.markup import escape

from challongeclient.cli.display import (
    console,
    display_match,
    display_participant,
    display_tournament,
)
from challongeclient.client import Client
from challongeclient.config import Config, load_config
from challongeclient.errors import ChallongeError
from challongeclient.models import Tournament
from challongeclient.resolver import separate_scores

logger = logging.getLogger("challongeclient")


def _setup_logging(config: Config) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = config.logging.file_path
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=2 * 1024 * 1024, backupCount=3,  # 2 MB × 3 files
                encoding="utf-8",
            )
        )
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        handlers=handlers,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage Challonge tournaments.")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Fetch and display a tournament")
    show.add_argument("tournament", help="Tournament ID or slug")
    show.add_argument(
        "--complete-only", action="store_true",
        help="Fail unless the tournament is complete",
    )

    create = sub.add_parser("create", help="Create a tournament")
    create.add_argument("name")
    create.add_argument("url", help="URL path segment for the new tournament")
    create.add_argument("--subdomain", default="")
    create.add_argument("--type", dest="tournament_type", choices=("single", "double"), default="single")

    start = sub.add_parser("start", help="Start a pending tournament")
    start.add_argument("tournament")

    add = sub.add_parser("add", help="Add a participant")
    add.add_argument("tournament")
    add.add_argument("name")
    add.add_argument("--misc", default="")

    remove = sub.add_parser("remove", help="Remove a participant by name")
    remove.add_argument("tournament")
    remove.add_argument("name")

    report = sub.add_parser("report", help="Report a match result")
    report.add_argument("tournament")
    report.add_argument("match_id", type=int)
    report.add_argument("score", help='Score as "a-b" (player 1 first)')
    report.add_argument("winner", help="Winner name or participant ID")

    return parser


def _fetch(client: Client, tournament_id: str, require_complete: bool = False) -> Tournament:
    return (
        client.new_tournament_request(tournament_id)
        .with_participants()
        .with_matches()
        .get(require_complete=require_complete)
    )


def _run(args: argparse.Namespace, client: Client) -> None:
    match args.command:
        case "show":
            display_tournament(_fetch(client, args.tournament, args.complete_only))
        case "create":
            tournament = client.create_tournament(
                args.name, args.url, args.subdomain, args.tournament_type,
            )
            display_tournament(tournament)
        case "start":
            tournament = _fetch(client, args.tournament)
            display_tournament(client.start(tournament))
        case "add":
            tournament = _fetch(client, args.tournament)
            display_participant(client.add_participant(tournament, args.name, args.misc))
        case "remove":
            tournament = _fetch(client, args.tournament)
            client.remove_participant(tournament, args.name)
            console.print(f"[green]✓[/] Removed [bold]{escape(args.name)}[/]")
        case "report":
            tournament = _fetch(client, args.tournament)
            match = next((m for m in tournament.get_matches() if m.id == args.match_id), None)
            if match is None:
                raise ValueError(f"Match {args.match_id} not found in {args.tournament}")
            winner = (
                tournament.get_participant(int(args.winner))
                if args.winner.isdigit()
                else tournament.get_participant_by_name(args.winner)
            )
            if winner is None:
                raise ValueError(f"Participant {args.winner!r} not found in {args.tournament}")
            match.player_one_score, match.player_two_score = separate_scores(args.score)
            # Report the side ID the match itself uses (group-stage IDs differ).
            if winner is match.player_one:
                match.winner_id = match.player_one_id
            elif winner is match.player_two:
                match.winner_id = match.player_two_id
            else:
                raise ValueError(f"{winner.name!r} is not playing match {match.id}")
            display_match(client.submit_match(tournament, match))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1
    except ValueError as exc:
        console.print(f"[red]Config error:[/] {escape(str(exc))}")
        return 1

    _setup_logging(config)
    client = Client.from_config(config.challonge, logger=logger)

    try:
        _run(args, client)
    except ChallongeError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1
    except ValueError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
