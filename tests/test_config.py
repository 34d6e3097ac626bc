import json

import pytest

from ecoblocks.components.challenge import Challenge
from ecoblocks.config import ConfigurationError, build_game_config, default_game_config, load_game_config
from ecoblocks.factories.content import SUSTAINABILITY_KEYWORDS

PROTECT = Challenge(id="1", template="We must _____ the planet", answer="protect")


def test_default_config_is_valid():
    config = default_game_config()
    config.validate()
    assert len(config.vocabulary) == 35
    assert config.available_keywords == tuple(SUSTAINABILITY_KEYWORDS[:10])
    assert config.require_preview is False


@pytest.mark.parametrize(
    "vocabulary, palette, challenges, options, message",
    [
        ([], ["#fff"], [PROTECT], {}, "vocabulary"),
        (["earth", " "], ["#fff"], [PROTECT], {}, "blank"),
        (["earth"], [], [PROTECT], {}, "palette"),
        (["earth"], ["#fff"], [], {}, "pool"),
        (["earth"], ["#fff"], [Challenge("1", "No blank here", "x")], {}, "exactly one"),
        (["earth"], ["#fff"], [Challenge("1", "_____ and _____", "x")], {}, "exactly one"),
        (["earth"], ["#fff"], [Challenge("1", "We _____", "  ")], {}, "no answer"),
        (["earth"], ["#fff"], [PROTECT, PROTECT], {}, "Duplicate"),
        (["earth"], ["#fff"], [PROTECT], {"board_width": 6}, "Board"),
        (["earth"], ["#fff"], [PROTECT], {"board_height": 3}, "Board"),
        (["earth"], ["#fff"], [PROTECT], {"challenge_time_limit": 0}, "time limit"),
    ],
)
def test_validation_rejects_unusable_content(vocabulary, palette, challenges, options, message):
    config = build_game_config(vocabulary, palette, challenges, **options)
    with pytest.raises(ConfigurationError, match=message):
        config.validate()


def test_load_from_json(tmp_path):
    path = tmp_path / "ecoblocks.json"
    path.write_text(json.dumps({
        "vocabulary": ["earth", "water"],
        "palette": ["#10B981"],
        "challenges": [
            {"id": "a", "template": "Save _____ today", "answer": "water", "keywords": ["water"]},
        ],
        "challenge_time_limit": 30,
        "require_preview": True,
    }), encoding="utf-8")

    config = load_game_config(path)

    config.validate()
    assert config.vocabulary == ("earth", "water")
    assert config.challenges[0].keywords == ("water",)
    assert config.challenge_time_limit == 30
    assert config.require_preview is True
    assert config.board_width == 10


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_game_config(tmp_path / "absent.json")


def test_malformed_config_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_game_config(path)


def test_challenge_entry_missing_a_field(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"challenges": [{"id": "a", "template": "_____"}]}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="answer"):
        load_game_config(path)
