"""
Relation resolution — turns a decoded tournament payload into a linked graph.

The service returns participants and matches as two flat lists that only
reference each other through integer IDs.  resolve_relations() unwraps those
lists onto the Tournament and resolve_participants() links every match to
its Participant objects, parses the score text and tallies wins, losses and
cumulative score on the participants.

Resolution is cumulative: resolving the same match twice counts its scores
and its result twice.  Callers that need fresh tallies should re-fetch the
tournament rather than re-resolve.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from challongeclient.models import Match, Tournament

logger = logging.getLogger(__name__)

_PENDING = "pending"
_SCORE_SIDE = re.compile(r"[0-9]+")


def separate_scores(score: str) -> tuple[int, int]:
    """
    Split an "a-b" score string into two integers.

    Raises:
        ValueError: the string does not have exactly one "-" or either side
                    is not an integer.
    """
    parts = score.split("-")
    if len(parts) != 2:
        raise ValueError(f"score is in wrong format: {score!r}")
    # Plain ASCII digits only; int() would also take " 3", "+3" and "1_0".
    if not all(_SCORE_SIDE.fullmatch(side) for side in parts):
        raise ValueError(f"could not parse scores {score!r}")
    return int(parts[0]), int(parts[1])


def resolve_participants(match: Match, tournament: Tournament) -> Match:
    """Link one match to its participants and apply its result to their tallies."""
    match.player_one = tournament.get_participant(match.player_one_id)
    match.player_two = tournament.get_participant(match.player_two_id)

    # Participants merged from a group stage keep their pre-merge ID as the
    # first group player id; matches from that stage still reference it.
    if match.player_one is None:
        match.player_one = tournament._get_participant_by_group_player_id(match.player_one_id)
    if match.player_two is None:
        match.player_two = tournament._get_participant_by_group_player_id(match.player_two_id)

    try:
        score_one, score_two = separate_scores(match.scores)
    except ValueError as exc:
        logger.debug("Match %s: %s; scoring as 0-0", match.id, exc)
        score_one, score_two = 0, 0

    match.player_one_score = score_one
    match.player_two_score = score_two

    if match.player_one is not None:
        match.player_one.total_score += score_one
    if match.player_two is not None:
        match.player_two.total_score += score_two

    if match.winner_id is None:
        return match

    if match.winner_id == match.player_one_id:
        _apply_result(match, match.player_one, match.player_two, score_one, score_two)
    elif match.winner_id == match.player_two_id:
        _apply_result(match, match.player_two, match.player_one, score_two, score_one)
    return match


def _apply_result(match, winner, loser, winner_score: int, loser_score: int) -> None:
    if winner is not None:
        winner.win()
    if loser is not None:
        loser.lose()
    match.winner = winner
    match.loser = loser
    match.winner_score = winner_score
    match.loser_score = loser_score


def resolve_relations(tournament: Tournament) -> Tournament:
    """
    Move decoded wrapper items onto the canonical collections and resolve them.

    Pending matches are dropped: they have no settled participants or scores.
    Returns the same tournament instance, mutated.
    """
    tournament.participants = [item.participant for item in tournament.participant_items]
    tournament.participant_items = []

    matches = []
    for item in tournament.match_items:
        match = item.match
        if match.state == _PENDING:
            continue
        resolve_participants(match, tournament)
        matches.append(match)
    tournament.matches = matches
    tournament.match_items = []

    logger.debug(
        "Resolved tournament %r: %d participants, %d matches",
        tournament.name,
        len(tournament.participants),
        len(tournament.matches),
    )
    return tournament


def diff_matches(before: list[Match], after: list[Match]) -> list[Match]:
    """
    Return the matches from `after` whose state differs from the match at the
    same position in `before`.  Only the overlapping prefix is compared.
    """
    return [
        new for old, new in zip(before, after)
        if old.state != new.state
    ]
