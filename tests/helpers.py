"""
Shared builders for tournament payloads and a recording fake transport.

Payloads mirror the service's wire shape: every participant and match is
wrapped in a one-key object.
"""

from __future__ import annotations

import json
from typing import Any

from challongeclient.transport import Transport, TransportResponse


def participant_json(pid: int, name: str, *, misc: str = "", seed: int = 1,
                     group_player_ids: list[int] | None = None,
                     final_rank: int | None = None) -> dict[str, Any]:
    return {
        "participant": {
            "id": pid,
            "display_name": name,
            "name": name,
            "misc": misc,
            "seed": seed,
            "final_rank": final_rank,
            "group_player_ids": group_player_ids or [],
        }
    }


def match_json(mid: int, p1: int | None, p2: int | None, *, winner: int | None = None,
               scores: str = "", state: str = "complete",
               identifier: str = "A") -> dict[str, Any]:
    loser = None
    if winner is not None:
        loser = p2 if winner == p1 else p1
    return {
        "match": {
            "id": mid,
            "identifier": identifier,
            "state": state,
            "player1_id": p1,
            "player2_id": p2,
            "winner_id": winner,
            "loser_id": loser,
            "scores_csv": scores,
            "updated_at": "2015-01-19T16:57:17-05:00",
        }
    }


def tournament_json(*, state: str = "complete", participants=None, matches=None,
                    url: str = "bracket", subdomain: str | None = None,
                    name: str = "Friday Night") -> dict[str, Any]:
    return {
        "id": 1086875,
        "name": name,
        "url": url,
        "subdomain": subdomain,
        "full_challonge_url": f"https://challonge.com/{url}",
        "state": state,
        "participants_count": len(participants or []),
        "tournament_type": "single elimination",
        "description": "",
        "game_name": "Chess",
        "progress_meter": 100 if state == "complete" else 0,
        "started_at": "2015-01-19T16:47:30-05:00",
        "updated_at": "2015-01-19T16:57:17-05:00",
        "completed_at": None,
        "participants": participants or [],
        "matches": matches or [],
    }


def two_player_tournament(state: str = "complete", scores: str = "3-1") -> dict[str, Any]:
    return tournament_json(
        state=state,
        participants=[participant_json(1, "Alpha", seed=1), participant_json(2, "Bravo", seed=2)],
        matches=[match_json(10, 1, 2, winner=1, scores=scores)],
    )


class FakeTransport(Transport):
    """Records every request and answers from a queue of canned responses."""

    def __init__(self, *responses: Any, status: int = 200) -> None:
        self.calls: list[tuple[str, str, dict[str, str] | None]] = []
        self._responses = [
            r if isinstance(r, TransportResponse) else TransportResponse(status, _body(r))
            for r in responses
        ]

    def request(self, method, url, params=None) -> TransportResponse:
        self.calls.append((method, url, params))
        if not self._responses:
            raise AssertionError(f"unexpected request: {method} {url}")
        return self._responses.pop(0)


def _body(payload: Any) -> bytes:
    if isinstance(payload, bytes):
        return payload
    return json.dumps(payload).encode()
