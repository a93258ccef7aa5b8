"""Client segmentation rules"""

from datetime import datetime, timedelta
from typing import Optional

SEGMENTS = ("new", "regular", "vip", "inactive")
INACTIVE_AFTER_DAYS = 30
VIP_MIN_VISITS = 10
REGULAR_MIN_VISITS = 2


def classify_client(
    total_visits: int,
    last_visit: Optional[datetime],
    is_active: bool = True,
    now: Optional[datetime] = None,
    inactive_after_days: int = INACTIVE_AFTER_DAYS,
) -> str:
    """
    Segment a client by visit count and recency.

    Deactivated clients and clients whose last visit is older than
    ``inactive_after_days`` are inactive; otherwise 10+ visits is vip,
    2+ is regular and anything less is new.
    """
    now = now or datetime.utcnow()
    if not is_active:
        return "inactive"
    if last_visit and last_visit < now - timedelta(days=inactive_after_days):
        return "inactive"
    if total_visits >= VIP_MIN_VISITS:
        return "vip"
    if total_visits >= REGULAR_MIN_VISITS:
        return "regular"
    return "new"
