from __future__ import annotations

from typing import Tuple

from ecoblocks.components.challenge import Challenge


SUSTAINABILITY_KEYWORDS: Tuple[str, ...] = (
    "protect", "nature", "sustain", "care", "green", "earth", "love",
    "peace", "hope", "future", "respect", "unity", "together", "harmony",
    "balance", "river", "ocean", "forest", "clean", "renewable", "recycle",
    "reduce", "reuse", "diverse", "inclusive", "community", "global",
    "citizen", "responsibility", "preserve", "wildlife", "ecosystem",
    "solar", "wind", "organic",
)

# Piece colors as hex strings; the renderer converts them to RGB.
DEFAULT_PALETTE: Tuple[str, ...] = (
    "#3B82F6",  # blue
    "#EAB308",  # yellow
    "#A855F7",  # purple
    "#22C55E",  # green
    "#EF4444",  # red
    "#6366F1",  # indigo
    "#F97316",  # orange
    "#EC4899",  # pink
    "#14B8A6",  # teal
    "#84CC16",  # lime
    "#F43F5E",  # rose
    "#10B981",  # emerald
    "#06B6D4",  # cyan
    "#F59E0B",  # amber
    "#8B5CF6",  # violet
    "#64748B",  # slate
)

DEFAULT_CHALLENGES: Tuple[Challenge, ...] = (
    Challenge(
        id="1",
        template="We must _____ our planet for future generations.",
        answer="protect",
        keywords=("protect", "preserve", "care", "sustain"),
    ),
    Challenge(
        id="2",
        template="Together we can create a more _____ world.",
        answer="sustainable",
        keywords=("sustainable", "green", "balanced", "harmonious"),
    ),
    Challenge(
        id="3",
        template="Every person deserves _____ and dignity.",
        answer="respect",
        keywords=("respect", "love", "care", "equality"),
    ),
)
