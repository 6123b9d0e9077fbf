from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from .types import IdeasPayload, RankedIdea

PAYLOAD_MODE = "normal"
PAYLOAD_SOURCE = "external_pusher"
DEFAULT_ORIGIN = "github_actions"


def iso_timestamp(now: datetime | None = None) -> str:
    dt = now or datetime.now(timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_payload(
    ideas: Iterable[RankedIdea],
    origin: str = DEFAULT_ORIGIN,
    now: datetime | None = None,
) -> IdeasPayload:
    picks = tuple(ideas)
    return IdeasPayload(
        ts=iso_timestamp(now),
        mode=PAYLOAD_MODE,
        source=PAYLOAD_SOURCE,
        meta={"origin": origin},
        top_n=len(picks),
        ideas=picks,
    )
