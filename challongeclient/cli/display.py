"""
Rich-based rendering of resolved tournaments for the command line.

Standings come straight from the resolver's tallies (wins, losses and
cumulative score), so a tournament must be resolved before it is shown.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from challongeclient.models import STATE_OPEN, Match, Participant, Tournament

console = Console(legacy_windows=False)

_STATE_STYLES = {
    "pending": "dim",
    "underway": "bright_blue",
    "awaiting_review": "yellow",
    "complete": "green",
}


def display_tournament(tournament: Tournament, out: Console | None = None) -> None:
    """Print the header panel, standings and match list."""
    out = out or console
    _header(tournament, out)
    if tournament.participants:
        out.print(standings_table(tournament.participants))
    if tournament.matches:
        out.print(matches_table(tournament.matches))


def display_participant(participant: Participant, out: Console | None = None) -> None:
    out = out or console
    misc = f"  [dim]misc={escape(participant.misc)}[/]" if participant.misc else ""
    out.print(f"[green]✓[/] [bold]{escape(participant.name)}[/] [dim](id {participant.id})[/]{misc}")


def display_match(match: Match, out: Console | None = None) -> None:
    out = out or console
    out.print(
        f"[green]✓[/] Match [bold]{escape(match.identifier or str(match.id))}[/] "
        f"[dim]{escape(match.state)}[/]  {escape(match.scores or '-')}"
    )


def sorted_standings(participants: list[Participant]) -> list[Participant]:
    """
    Order by final rank when the service assigned one, then by wins, fewest
    losses and total score.
    """
    return sorted(
        participants,
        key=lambda p: (
            p.final_rank if p.final_rank is not None else float("inf"),
            -p.wins,
            p.losses,
            -p.total_score,
            p.seed,
        ),
    )


def standings_table(participants: list[Participant]) -> Table:
    table = Table(
        title="Standings",
        show_header=True,
        header_style="bold",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Name", min_width=20)
    table.add_column("Seed", justify="right", width=5)
    table.add_column("W", justify="center", width=4)
    table.add_column("L", justify="center", width=4)
    table.add_column("Score", justify="right", width=6)

    for i, p in enumerate(sorted_standings(participants), 1):
        rank = str(p.final_rank) if p.final_rank is not None else str(i)
        style = "bold yellow" if p.final_rank == 1 else ""
        table.add_row(
            rank,
            escape(p.name),
            str(p.seed),
            str(p.wins),
            str(p.losses),
            str(p.total_score),
            style=style,
        )
    return table


def matches_table(matches: list[Match]) -> Table:
    table = Table(
        title="Matches",
        show_header=True,
        header_style="bold",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("Match", style="dim", width=6)
    table.add_column("Player 1", min_width=16)
    table.add_column("Score", justify="center", width=7)
    table.add_column("Player 2", min_width=16)
    table.add_column("State", width=9)

    for m in matches:
        table.add_row(
            escape(m.identifier or str(m.id)),
            _side(m, m.player_one, m.player_one_id),
            escape(m.scores or "-"),
            _side(m, m.player_two, m.player_two_id),
            f"[bright_blue]{escape(m.state)}[/]" if m.state == STATE_OPEN else escape(m.state),
        )
    return table


def _side(match: Match, participant: Participant | None, participant_id: int | None) -> str:
    if participant is None:
        return f"[dim]TBD ({participant_id})[/]" if participant_id else "[dim]TBD[/]"
    if match.winner is participant:
        return f"[bold green]{escape(participant.name)}[/]"
    return escape(participant.name)


def _header(tournament: Tournament, out: Console) -> None:
    style = _STATE_STYLES.get(tournament.state, "white")
    lines = [
        f"[bold]{escape(tournament.name)}[/]",
        "",
        f"[dim]Type:[/] {escape(tournament.tournament_type or '-')}  •  "
        f"[dim]State:[/] [{style}]{escape(tournament.state or '-')}[/]  •  "
        f"[dim]Progress:[/] {tournament.progress}%",
        f"[dim]Participants:[/] {tournament.participants_count or len(tournament.participants)}",
    ]
    if tournament.full_url:
        lines.append(f"[dim]{escape(tournament.full_url)}[/]")
    out.print()
    out.print(
        Panel(
            "\n".join(lines),
            title=f"[bold green] {escape(tournament.get_url())} [/]",
            border_style="green",
            expand=False,
        )
    )
