"""Lexer configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class PositionTracking(StrEnum):
    """How much position information each token records."""

    FULL = "full"
    ONLY_OFFSET = "only_offset"


@dataclass(frozen=True, slots=True)
class LexerOptions:
    position_tracking: PositionTracking = PositionTracking.FULL

    @property
    def tracks_lines(self) -> bool:
        return self.position_tracking == PositionTracking.FULL
