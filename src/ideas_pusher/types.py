from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class NormalizedRow:
    symbol: str
    quote_volume: float
    pct_change: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "quoteVolume": self.quote_volume,
            "pctChange": self.pct_change,
        }


@dataclass(frozen=True)
class RankedIdea:
    symbol: str
    side: str
    score: float
    rank: int
    ttl_sec: int


@dataclass(frozen=True)
class IdeasPayload:
    ts: str
    mode: str
    source: str
    meta: dict[str, str]
    top_n: int
    ideas: tuple[RankedIdea, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts": self.ts,
            "mode": self.mode,
            "source": self.source,
            "meta": dict(self.meta),
            "top_n": self.top_n,
            "ideas": [asdict(idea) for idea in self.ideas],
        }
