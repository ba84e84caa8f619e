from workforce_api.extensions import db
from workforce_api.common.parsing import utcnow, iso_ts, iso_date

OPEN = 1

class AttendanceRecord(db.Model):
    __tablename__ = "attendance_records"
    id = db.Column(db.Integer, primary_key=True)
    user_id   = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    work_date = db.Column(db.Date, nullable=False, index=True)
    check_in  = db.Column(db.DateTime, nullable=False)
    check_out = db.Column(db.DateTime, nullable=True)
    check_in_location  = db.Column(db.JSON, nullable=True)
    check_out_location = db.Column(db.JSON, nullable=True)
    # 1 while the session is open, NULL once closed; NULLs never collide in a unique index
    open_slot = db.Column(db.SmallInteger, nullable=True, default=OPEN)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        db.UniqueConstraint("user_id", "work_date", "open_slot", name="uq_attendance_one_open_per_day"),
    )

    user = db.relationship("User", backref="attendance_records")

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def duration_minutes(self, until=None):
        """Minutes between check-in and check-out (or `until` for an open session)."""
        end = self.check_out or until
        if end is None or self.check_in is None:
            return None
        return max(int((end - self.check_in).total_seconds() // 60), 0)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": iso_date(self.work_date),
            "checkIn": iso_ts(self.check_in),
            "checkOut": iso_ts(self.check_out),
            "location": {
                "checkIn": self.check_in_location,
                "checkOut": self.check_out_location,
            },
            "durationMinutes": self.duration_minutes(),
        }
