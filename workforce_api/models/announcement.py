from workforce_api.extensions import db
from workforce_api.common.parsing import utcnow, iso_ts, iso_date

class Announcement(db.Model):
    __tablename__ = "announcements"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def is_active(self, on_date) -> bool:
        return self.start_date <= on_date <= self.end_date

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "startDate": iso_date(self.start_date),
            "endDate": iso_date(self.end_date),
            "createdBy": self.created_by,
            "createdAt": iso_ts(self.created_at),
        }
