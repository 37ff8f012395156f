"""
Challonge API client.

Client is the single entry point; see challongeclient.client for usage.
Library logging goes to the "challongeclient" logger, which is silent until
the application configures logging.
"""

from __future__ import annotations

import logging

from challongeclient.client import API_VERSION, Client, TournamentRequest
from challongeclient.config import ClientConfig, Config, LoggingConfig, load_config
from challongeclient.errors import (
    APIError,
    ChallongeError,
    ParticipantNotFoundError,
    TournamentStateError,
    TransportError,
)
from challongeclient.models import (
    STATE_AWAITING_REVIEW,
    STATE_COMPLETE,
    STATE_OPEN,
    STATE_PENDING,
    STATE_UNDERWAY,
    APIResponse,
    Match,
    MatchItem,
    Participant,
    ParticipantItem,
    Tournament,
)
from challongeclient.resolver import (
    diff_matches,
    resolve_participants,
    resolve_relations,
    separate_scores,
)
from challongeclient.transport import Transport, TransportResponse, UrllibTransport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Client
    "API_VERSION",
    "Client",
    "TournamentRequest",
    # Config
    "ClientConfig",
    "Config",
    "LoggingConfig",
    "load_config",
    # Errors
    "ChallongeError",
    "TransportError",
    "APIError",
    "TournamentStateError",
    "ParticipantNotFoundError",
    # Entities
    "APIResponse",
    "Tournament",
    "Participant",
    "Match",
    "ParticipantItem",
    "MatchItem",
    "STATE_OPEN",
    "STATE_PENDING",
    "STATE_UNDERWAY",
    "STATE_COMPLETE",
    "STATE_AWAITING_REVIEW",
    # Resolution
    "resolve_relations",
    "resolve_participants",
    "separate_scores",
    "diff_matches",
    # Transport
    "Transport",
    "TransportResponse",
    "UrllibTransport",
]
