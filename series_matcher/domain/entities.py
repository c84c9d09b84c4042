from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FavoriteSeries:
    id: uuid.UUID
    user_id: str
    series_tmdb_id: int
    added_at: datetime


@dataclass(frozen=True)
class IgnoredSeries:
    id: uuid.UUID
    user_id: str
    series_tmdb_id: int
    ignored_at: datetime
