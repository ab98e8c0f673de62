from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ClientHealth:
    ok: bool
    detail: str | None = None
