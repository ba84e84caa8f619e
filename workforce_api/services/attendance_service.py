# workforce_api/services/attendance_service.py
from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional, Any

from sqlalchemy.exc import IntegrityError

from workforce_api.extensions import db
from workforce_api.common.errors import Conflict
from workforce_api.common.parsing import utcnow
from workforce_api.models.attendance import AttendanceRecord, OPEN

log = logging.getLogger(__name__)

# check-then-write must not interleave between request threads
_store_lock = threading.Lock()


def open_record_for(user_id: int, on_date) -> Optional[AttendanceRecord]:
    return (AttendanceRecord.query
            .filter_by(user_id=user_id, work_date=on_date)
            .filter(AttendanceRecord.check_out.is_(None))
            .order_by(AttendanceRecord.check_in.desc())
            .first())


def check_in(user_id: int, location: Any = None, now: datetime | None = None) -> AttendanceRecord:
    now = now or utcnow()
    day = now.date()
    with _store_lock:
        if open_record_for(user_id, day):
            raise Conflict("Already checked in today", code="attendance.already_checked_in")

        rec = AttendanceRecord(
            user_id=user_id,
            work_date=day,
            check_in=now,
            check_in_location=location,
            open_slot=OPEN,
        )
        db.session.add(rec)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise Conflict("Already checked in today", code="attendance.already_checked_in")

    log.info("check-in user=%s record=%s", user_id, rec.id)
    return rec


def check_out(user_id: int, location: Any = None, now: datetime | None = None) -> AttendanceRecord:
    now = now or utcnow()
    with _store_lock:
        rec = open_record_for(user_id, now.date())
        if not rec:
            raise Conflict("No active check-in found", code="attendance.no_active_check_in")

        rec.check_out = max(now, rec.check_in)
        rec.check_out_location = location
        rec.open_slot = None
        db.session.commit()

    log.info("check-out user=%s record=%s minutes=%s", user_id, rec.id, rec.duration_minutes())
    return rec


def minutes_worked(records, now: datetime | None = None) -> int:
    """Total derived duration; open sessions count up to `now`."""
    now = now or utcnow()
    return sum(r.duration_minutes(until=now) or 0 for r in records)
