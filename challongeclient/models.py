"""
Entity model — Tournament, Participant, Match and the response envelope.

Entities are plain mutable dataclasses decoded from the service's JSON.
They use identity equality: the resolver wires matches to the exact
Participant objects held by the owning Tournament, and counters on those
objects are updated in place.

The service wraps every element of a tournament's participant and match
lists in a one-key object ({"participant": {...}} / {"match": {...}}).
ParticipantItem and MatchItem mirror that envelope; they only live between
decoding and resolution, after which Tournament.participants and
Tournament.matches are the canonical collections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Literal

from challongeclient.resolver import resolve_participants

if TYPE_CHECKING:
    from challongeclient.client import Client, TournamentRequest

TournamentState = Literal["pending", "underway", "awaiting_review", "complete"]
MatchState = Literal["open", "pending", "complete"]

STATE_OPEN = "open"
STATE_PENDING = "pending"
STATE_UNDERWAY = "underway"
STATE_COMPLETE = "complete"
STATE_AWAITING_REVIEW = "awaiting_review"


# --------------------------------------------------------------------------- #
# Decoding helpers                                                             #
# --------------------------------------------------------------------------- #

def _int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _errors(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(e) for e in value]


def _timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


# --------------------------------------------------------------------------- #
# Entities                                                                     #
# --------------------------------------------------------------------------- #

@dataclass(eq=False)
class Participant:
    """A competitor entered into a tournament."""

    id: int = 0
    name: str = ""
    misc: str = ""   # free-form; callers use it as an external correlation key
    seed: int = 0
    final_rank: int | None = None
    group_player_ids: list[int] = field(default_factory=list)

    # Session-local tallies, derived by the resolver; never on the wire.
    wins: int = 0
    losses: int = 0
    total_score: int = 0

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Participant:
        return cls(
            id=_int(raw.get("id")),
            name=_str(raw.get("display_name") or raw.get("name")),
            misc=_str(raw.get("misc")),
            seed=_int(raw.get("seed")),
            final_rank=_optional_int(raw.get("final_rank")),
            group_player_ids=[
                gid for gid in (_optional_int(v) for v in raw.get("group_player_ids") or [])
                if gid is not None
            ],
        )

    def win(self) -> None:
        self.wins += 1

    def lose(self) -> None:
        self.losses += 1

    def __repr__(self) -> str:
        return f"Participant({self.name!r}, id={self.id}, W{self.wins}-L{self.losses})"


@dataclass(eq=False)
class Match:
    """A single contest between two participants."""

    id: int = 0
    identifier: str = ""
    state: str = ""
    player_one_id: int | None = None
    player_two_id: int | None = None
    winner_id: int | None = None
    loser_id: int | None = None
    scores: str = ""   # raw "a-b" text as sent by the service
    updated_at: datetime | None = None

    # Filled in by resolve_participants(); lookup-only references.
    player_one: Participant | None = field(default=None, repr=False)
    player_two: Participant | None = field(default=None, repr=False)
    winner: Participant | None = field(default=None, repr=False)
    loser: Participant | None = field(default=None, repr=False)
    player_one_score: int = 0
    player_two_score: int = 0
    winner_score: int = 0
    loser_score: int = 0

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Match:
        return cls(
            id=_int(raw.get("id")),
            identifier=_str(raw.get("identifier")),
            state=_str(raw.get("state")),
            player_one_id=_optional_int(raw.get("player1_id")),
            player_two_id=_optional_int(raw.get("player2_id")),
            winner_id=_optional_int(raw.get("winner_id")),
            loser_id=_optional_int(raw.get("loser_id")),
            scores=_str(raw.get("scores_csv")),
            updated_at=_timestamp(raw.get("updated_at")),
        )

    def involves(self, participant_id: int) -> bool:
        return participant_id in (self.player_one_id, self.player_two_id)


@dataclass(frozen=True)
class ParticipantItem:
    """Wire wrapper: {"participant": {...}}."""

    participant: Participant

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ParticipantItem:
        return cls(participant=Participant.from_dict(raw.get("participant") or {}))


@dataclass(frozen=True)
class MatchItem:
    """Wire wrapper: {"match": {...}}."""

    match: Match

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> MatchItem:
        return cls(match=Match.from_dict(raw.get("match") or {}))


@dataclass(eq=False)
class Tournament:
    """
    A bracket instance on the remote service.

    Constructed only by decoding a response.  Add/remove participant and
    start mutate it in place; it is never persisted locally.
    """

    id: int = 0
    name: str = ""
    url: str = ""
    full_url: str = ""
    state: str = ""
    subdomain: str = ""
    participants_count: int = 0
    tournament_type: str = ""
    description: str = ""
    game_name: str = ""
    progress: int = 0
    started_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None
    sub_url: str = ""   # slug the tournament was fetched by

    participants: list[Participant] = field(default_factory=list, repr=False)
    matches: list[Match] = field(default_factory=list, repr=False)

    # Decode-time only; emptied by resolve_relations().
    participant_items: list[ParticipantItem] = field(default_factory=list, repr=False)
    match_items: list[MatchItem] = field(default_factory=list, repr=False)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Tournament:
        return cls(
            id=_int(raw.get("id")),
            name=_str(raw.get("name")),
            url=_str(raw.get("url")),
            full_url=_str(raw.get("full_challonge_url")),
            state=_str(raw.get("state")),
            subdomain=_str(raw.get("subdomain")),
            participants_count=_int(raw.get("participants_count")),
            tournament_type=_str(raw.get("tournament_type")),
            description=_str(raw.get("description")),
            game_name=_str(raw.get("game_name")),
            progress=_int(raw.get("progress_meter")),
            started_at=_timestamp(raw.get("started_at")),
            updated_at=_timestamp(raw.get("updated_at")),
            completed_at=_timestamp(raw.get("completed_at")),
            sub_url=_str(raw.get("sub_url")),
            participant_items=[
                ParticipantItem.from_dict(item) for item in raw.get("participants") or []
            ],
            match_items=[MatchItem.from_dict(item) for item in raw.get("matches") or []],
        )

    # ------------------------------------------------------------------ #
    # Identity                                                             #
    # ------------------------------------------------------------------ #

    def get_url(self) -> str:
        """Return "subdomain-url" or just "url"."""
        if self.subdomain:
            return f"{self.subdomain}-{self.url}"
        return self.url

    def is_completed(self) -> bool:
        return self.state in (STATE_COMPLETE, STATE_AWAITING_REVIEW)

    def update(self, client: Client) -> TournamentRequest:
        """Build a request that re-fetches this tournament by its slug."""
        return client.new_tournament_request(self.sub_url or self.get_url())

    # ------------------------------------------------------------------ #
    # Participant lookups                                                  #
    # ------------------------------------------------------------------ #

    def get_participant(self, participant_id: int | None) -> Participant | None:
        return self._find_participant(lambda p: p.id == participant_id)

    def get_participant_by_name(self, name: str) -> Participant | None:
        return self._find_participant(lambda p: p.name == name)

    def get_participant_by_misc(self, misc: str) -> Participant | None:
        return self._find_participant(lambda p: p.misc == misc)

    def _get_participant_by_group_player_id(self, group_player_id: int | None) -> Participant | None:
        return self._find_participant(
            lambda p: bool(p.group_player_ids) and p.group_player_ids[0] == group_player_id
        )

    def _find_participant(self, predicate: Callable[[Participant], bool]) -> Participant | None:
        for participant in self.participants:
            if predicate(participant):
                return participant
        return None

    # ------------------------------------------------------------------ #
    # Match lookups                                                        #
    # ------------------------------------------------------------------ #

    def get_matches(self) -> list[Match]:
        return list(self.matches)

    def get_open_matches(self) -> list[Match]:
        return [m for m in self.matches if m.state == STATE_OPEN]

    def get_match(self, match_id: int) -> Match | None:
        """
        Return the match with the given ID, re-resolved against the current
        participant list.

        Re-resolution adds the match's scores and win/loss result to the
        participants again; call this sparingly on a loaded tournament.
        """
        for match in self.matches:
            if match.id == match_id:
                resolve_participants(match, self)
                return match
        return None

    def get_open_match_for_participant(self, participant: Participant) -> Match | None:
        for match in self.get_open_matches():
            if match.involves(participant.id):
                return match
        return None


@dataclass
class APIResponse:
    """Envelope every endpoint answers with."""

    tournament: Tournament | None = None
    participant: Participant | None = None
    match: Match = field(default_factory=Match)
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> APIResponse:
        if not isinstance(raw, dict):
            return cls()
        tournament_raw = raw.get("tournament")
        participant_raw = raw.get("participant")
        match_raw = raw.get("match")
        return cls(
            tournament=Tournament.from_dict(tournament_raw) if isinstance(tournament_raw, dict) else None,
            participant=Participant.from_dict(participant_raw) if isinstance(participant_raw, dict) else None,
            match=Match.from_dict(match_raw) if isinstance(match_raw, dict) else Match(),
            errors=_errors(raw.get("errors")),
        )

    def has_errors(self) -> bool:
        return len(self.errors) > 0
