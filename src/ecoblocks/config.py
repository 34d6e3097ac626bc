"""Game content and tuning supplied by the host at configuration time."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence, Tuple

from ecoblocks.components.challenge import Challenge
from ecoblocks.constants import (
    AVAILABLE_KEYWORD_COUNT,
    BLANK_MARKER,
    BOARD_HEIGHT,
    BOARD_WIDTH,
    CHALLENGE_TIME_LIMIT,
    SPAWN_X,
)


class ConfigurationError(ValueError):
    """Raised when the supplied vocabulary, palette or challenge pool is unusable."""


@dataclass(slots=True)
class GameConfig:
    """Vocabulary, color palette and challenge pool for a session.

    The engine treats this as immutable for a session's lifetime.
    """

    vocabulary: Tuple[str, ...]
    palette: Tuple[str, ...]
    challenges: Tuple[Challenge, ...]
    board_width: int = BOARD_WIDTH
    board_height: int = BOARD_HEIGHT
    challenge_time_limit: int = CHALLENGE_TIME_LIMIT
    available_keyword_count: int = AVAILABLE_KEYWORD_COUNT
    require_preview: bool = False

    @property
    def available_keywords(self) -> Tuple[str, ...]:
        return self.vocabulary[: self.available_keyword_count]

    def validate(self) -> None:
        if not self.vocabulary:
            raise ConfigurationError("Keyword vocabulary is empty")
        if any(not isinstance(word, str) or not word.strip() for word in self.vocabulary):
            raise ConfigurationError("Keyword vocabulary contains blank entries")
        if not self.palette:
            raise ConfigurationError("Color palette is empty")
        if not self.challenges:
            raise ConfigurationError("Challenge pool is empty")
        seen: set[str] = set()
        for challenge in self.challenges:
            if challenge.id in seen:
                raise ConfigurationError(f"Duplicate challenge id '{challenge.id}'")
            seen.add(challenge.id)
            if challenge.template.count(BLANK_MARKER) != 1:
                raise ConfigurationError(
                    f"Challenge '{challenge.id}' must contain exactly one '{BLANK_MARKER}' blank"
                )
            if not challenge.answer.strip():
                raise ConfigurationError(f"Challenge '{challenge.id}' has no answer")
        if self.board_width < SPAWN_X + 4 or self.board_height < 4:
            raise ConfigurationError(
                f"Board must be at least {SPAWN_X + 4} wide and 4 tall to fit a spawned piece"
            )
        if self.challenge_time_limit <= 0:
            raise ConfigurationError("Challenge time limit must be positive")
        if self.available_keyword_count < 0:
            raise ConfigurationError("available_keyword_count cannot be negative")


def _challenge_from_mapping(payload: Mapping[str, Any]) -> Challenge:
    try:
        return Challenge(
            id=str(payload["id"]),
            template=str(payload["template"]),
            answer=str(payload["answer"]),
            keywords=tuple(str(word) for word in payload.get("keywords", ())),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Challenge entry missing field {exc.args[0]!r}") from exc


def build_game_config(
    vocabulary: Iterable[str],
    palette: Iterable[str],
    challenges: Sequence[Challenge | Mapping[str, Any]],
    **options: Any,
) -> GameConfig:
    parsed = tuple(
        item if isinstance(item, Challenge) else _challenge_from_mapping(item)
        for item in challenges
    )
    return GameConfig(
        vocabulary=tuple(vocabulary),
        palette=tuple(palette),
        challenges=parsed,
        **options,
    )


def load_game_config(path: Path | str) -> GameConfig:
    """Read vocabulary, palette, challenges and tuning from a JSON file."""
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file {config_path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError("Config root must be an object")
    options = {
        key: payload[key]
        for key in (
            "board_width",
            "board_height",
            "challenge_time_limit",
            "available_keyword_count",
            "require_preview",
        )
        if key in payload
    }
    return build_game_config(
        payload.get("vocabulary", []),
        payload.get("palette", []),
        payload.get("challenges", []),
        **options,
    )


def default_game_config(**options: Any) -> GameConfig:
    from ecoblocks.factories.content import DEFAULT_CHALLENGES, DEFAULT_PALETTE, SUSTAINABILITY_KEYWORDS

    return build_game_config(SUSTAINABILITY_KEYWORDS, DEFAULT_PALETTE, DEFAULT_CHALLENGES, **options)
