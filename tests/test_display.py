import io
import unittest

from rich.console import Console

from challongeclient.cli.display import (
    display_match,
    display_participant,
    display_tournament,
    matches_table,
    sorted_standings,
)
from challongeclient.models import Match, Participant, Tournament
from challongeclient.resolver import resolve_relations
from tests.helpers import match_json, participant_json, tournament_json


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=120, color_system=None, legacy_windows=False), buf


class DisplayTests(unittest.TestCase):
    def test_display_tournament_renders_standings_and_matches(self) -> None:
        t = resolve_relations(Tournament.from_dict(tournament_json(
            name="Friday [Night]",
            participants=[participant_json(1, "Alpha"), participant_json(2, "Bravo")],
            matches=[match_json(10, 1, 2, winner=1, scores="3-1"), match_json(11, 2, None, state="open")],
        )))
        out, buf = _console()

        display_tournament(t, out)

        text = buf.getvalue()
        self.assertIn("Friday [Night]", text)
        self.assertIn("Standings", text)
        self.assertIn("Alpha", text)
        self.assertIn("Bravo", text)
        self.assertIn("3-1", text)
        self.assertIn("TBD", text)

    def test_display_without_participants(self) -> None:
        out, buf = _console()
        display_tournament(Tournament(name="Empty", url="empty", state="pending"), out)
        self.assertIn("Empty", buf.getvalue())
        self.assertNotIn("Standings", buf.getvalue())


class TestSortedStandings:
    def test_final_rank_first_then_record(self):
        a = Participant(id=1, name="A", wins=3, losses=0, final_rank=2)
        b = Participant(id=2, name="B", wins=1, losses=1, final_rank=1)
        c = Participant(id=3, name="C", wins=2, losses=1)
        d = Participant(id=4, name="D", wins=2, losses=1, total_score=9)
        order = [p.name for p in sorted_standings([a, b, c, d])]
        assert order == ["B", "A", "D", "C"]


class MarkupEscapingTests(unittest.TestCase):
    def test_participant_misc_with_markup(self) -> None:
        out, buf = _console()
        display_participant(Participant(id=1, name="A", misc="[/]"), out)
        self.assertIn("misc=[/]", buf.getvalue())

    def test_match_fields_with_markup(self) -> None:
        out, buf = _console()
        display_match(Match(id=7, identifier="[bold]", state="[/]", scores="[red]"), out)
        text = buf.getvalue()
        self.assertIn("[bold]", text)
        self.assertIn("[/]", text)
        self.assertIn("[red]", text)

    def test_matches_table_with_markup_state(self) -> None:
        out, buf = _console()
        out.print(matches_table([Match(id=7, identifier="[/]", state="[/]"),
                                 Match(id=8, identifier="B", state="open")]))
        self.assertIn("[/]", buf.getvalue())

    def test_tournament_header_with_markup(self) -> None:
        out, buf = _console()
        display_tournament(
            Tournament(name="T", url="[/]", state="[/]", tournament_type="[x]",
                       full_url="https://challonge.com/[/]"),
            out,
        )
        self.assertIn("[x]", buf.getvalue())
