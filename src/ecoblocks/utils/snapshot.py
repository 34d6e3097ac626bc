"""Read-only view of the engine state for renderers and tests."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from esper import World

from ecoblocks.components.active_pieces import ActivePieces
from ecoblocks.components.board import Board
from ecoblocks.components.challenge import ActiveChallenge, ChallengeState
from ecoblocks.components.game_state import GameMode
from ecoblocks.components.piece import Piece
from ecoblocks.components.session_stats import SessionStats
from ecoblocks.components.timers import ChallengeCountdown
from ecoblocks.utils.game_state import get_game_state
from ecoblocks.utils.session import live_session_entity


@dataclass(frozen=True)
class ChallengeSnapshot:
    challenge_id: str
    template: str
    answer: str
    points: int
    time_left: int
    previewing: bool
    state: ChallengeState


@dataclass(frozen=True)
class GameSnapshot:
    mode: GameMode
    session_id: Optional[str]
    board: Optional[Board]
    current_piece: Optional[Piece]
    next_piece: Optional[Piece]
    score: int = 0
    level: int = 1
    lines: int = 0
    challenge: Optional[ChallengeSnapshot] = None


def build_snapshot(world: World) -> GameSnapshot:
    state = get_game_state(world)
    entity = live_session_entity(world)
    if entity is None:
        return GameSnapshot(
            mode=state.mode,
            session_id=state.session_id,
            board=None,
            current_piece=None,
            next_piece=None,
        )
    pieces = world.component_for_entity(entity, ActivePieces)
    stats = world.component_for_entity(entity, SessionStats)
    challenge = None
    if world.has_component(entity, ActiveChallenge):
        active = world.component_for_entity(entity, ActiveChallenge)
        time_left = 0
        if world.has_component(entity, ChallengeCountdown):
            time_left = world.component_for_entity(entity, ChallengeCountdown).time_left
        challenge = ChallengeSnapshot(
            challenge_id=active.challenge.id,
            template=active.challenge.template,
            answer=active.answer,
            points=active.points,
            time_left=time_left,
            previewing=active.previewing,
            state=active.state,
        )
    return GameSnapshot(
        mode=state.mode,
        session_id=state.session_id,
        board=world.component_for_entity(entity, Board),
        current_piece=pieces.current,
        next_piece=pieces.next,
        score=stats.score,
        level=stats.level,
        lines=stats.lines_cleared,
        challenge=challenge,
    )
