from workforce_api.extensions import db
from workforce_api.common.parsing import utcnow, iso_ts, iso_date

LEAVE_STATUSES = ("pending", "approved", "rejected")

class LeaveRequest(db.Model):
    __tablename__ = "leave_requests"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reason = db.Column(db.Text, nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")  # pending|approved|rejected

    # NULL = not yet reviewed by HR
    hr_approved = db.Column(db.Boolean, nullable=True)
    hr_comment = db.Column(db.Text)
    hr_reviewed_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    hr_updated_at = db.Column(db.DateTime)

    admin_comment = db.Column(db.Text)
    admin_reviewed_by = db.Column(db.Integer, db.ForeignKey("users.id"))

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, onupdate=utcnow)

    user = db.relationship("User", foreign_keys=[user_id], backref="leave_requests")
    actions = db.relationship(
        "LeaveApprovalAction",
        back_populates="leave_request",
        order_by="LeaveApprovalAction.id",
        cascade="all, delete-orphan",
    )

    @property
    def total_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "reason": self.reason,
            "startDate": iso_date(self.start_date),
            "endDate": iso_date(self.end_date),
            "totalDays": self.total_days,
            "status": self.status,
            "hrApproved": self.hr_approved,
            "hrComment": self.hr_comment,
            "hrReviewedBy": self.hr_reviewed_by,
            "hrUpdatedAt": iso_ts(self.hr_updated_at),
            "adminComment": self.admin_comment,
            "adminReviewedBy": self.admin_reviewed_by,
            "createdAt": iso_ts(self.created_at),
            "updatedAt": iso_ts(self.updated_at),
        }

class LeaveApprovalAction(db.Model):
    __tablename__ = "leave_approval_actions"
    id = db.Column(db.Integer, primary_key=True)
    leave_request_id = db.Column(db.Integer, db.ForeignKey("leave_requests.id", ondelete="CASCADE"), nullable=False, index=True)
    action = db.Column(db.String(20), nullable=False)  # submitted|hr_approved|hr_rejected|approved|rejected
    comment = db.Column(db.Text)
    acted_by_user_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    acted_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    leave_request = db.relationship("LeaveRequest", back_populates="actions")
    acted_by = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "action": self.action,
            "comment": self.comment,
            "actedBy": self.acted_by_user_id,
            "actedAt": iso_ts(self.acted_at),
        }
