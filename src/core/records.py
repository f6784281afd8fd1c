"""Analysis records as handed to the history store.

A record wraps one AnalysisBundle payload together with the image URL,
comparison target label and headline similarity score. Records are kept for
RETENTION_DAYS; expiry_message() produces the countdown shown in history
listings.
"""

from __future__ import annotations

import datetime
import math
import random
import string
import time
from dataclasses import dataclass, field
from datetime import timezone
from typing import Any, Dict, Optional

from .models import AnalysisBundle
from .scoring import technical_score

RETENTION_DAYS = 30

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_analysis_id() -> str:
    """'analysis-<epoch ms>-<9 base36 chars>'."""
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"analysis-{int(time.time() * 1000)}-{suffix}"


@dataclass
class AnalysisRecord:
    id: str
    image_url: str
    comparison_type: str
    comparison_target: str
    similarity_score: int
    analysis_data: Dict[str, Any]
    created_at: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(timezone.utc)
    )
    user_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Row payload; created_at as ISO-8601."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "image_url": self.image_url,
            "comparison_type": self.comparison_type,
            "comparison_target": self.comparison_target,
            "similarity_score": self.similarity_score,
            "analysis_data": self.analysis_data,
            "created_at": self.created_at.isoformat(timespec="seconds"),
        }

    @property
    def expires_at(self) -> datetime.datetime:
        return self.created_at + datetime.timedelta(days=RETENTION_DAYS)


def build_record(
    bundle: AnalysisBundle,
    image_url: str,
    comparison_type: str,
    comparison_target: str,
    user_id: Optional[str] = None,
    created_at: Optional[datetime.datetime] = None,
) -> AnalysisRecord:
    rec = AnalysisRecord(
        id=generate_analysis_id(),
        user_id=user_id,
        image_url=image_url,
        comparison_type=comparison_type,
        comparison_target=comparison_target,
        similarity_score=technical_score(bundle),
        analysis_data=bundle.to_dict(),
    )
    if created_at is not None:
        rec.created_at = created_at
    return rec


def _aware(dt: datetime.datetime) -> datetime.datetime:
    # naive datetimes are taken as UTC
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def days_until_expiry(
    created_at: datetime.datetime, now: Optional[datetime.datetime] = None
) -> int:
    now = _aware(now or datetime.datetime.now(timezone.utc))
    expiry = _aware(created_at) + datetime.timedelta(days=RETENTION_DAYS)
    return math.ceil((expiry - now).total_seconds() / 86400)


def expiry_message(
    created_at: datetime.datetime, now: Optional[datetime.datetime] = None
) -> str:
    days = days_until_expiry(created_at, now)
    if days <= 1:
        return "Expires today"
    return f"Expires in {days} days"


def format_record_date(dt: datetime.datetime) -> str:
    """e.g. 'Oct 19, 2026, 3:04 PM' (no zero-padded hour)."""
    if dt.tzinfo is not None:
        # aware timestamps are shown on the local clock
        dt = dt.astimezone()
    hour = dt.hour % 12 or 12
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}, {hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"
