from werkzeug.security import generate_password_hash, check_password_hash

from workforce_api.extensions import db
from workforce_api.common.parsing import utcnow, iso_ts, iso_date

class User(db.Model):
    __tablename__ = "users"

    id            = db.Column(db.Integer, primary_key=True)
    name          = db.Column(db.String(255), nullable=False)
    email         = db.Column(db.String(255), unique=True, index=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role          = db.Column(db.String(20), nullable=False, default="employee")  # admin|hr|employee
    department    = db.Column(db.String(120))
    position      = db.Column(db.String(120))
    join_date     = db.Column(db.Date)
    avatar        = db.Column(db.String(500))

    # self-service profile
    phone   = db.Column(db.String(50))
    address = db.Column(db.String(500))
    bio     = db.Column(db.Text)
    skills  = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, onupdate=utcnow)

    # --- helpers ---
    def set_password(self, raw: str):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw: str) -> bool:
        return check_password_hash(self.password_hash, raw)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def public_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "department": self.department,
            "position": self.position,
            "joinDate": iso_date(self.join_date),
            "avatar": self.avatar,
        }

    def profile_dict(self):
        d = self.public_dict()
        d.update({
            "phone": self.phone,
            "address": self.address,
            "bio": self.bio,
            "skills": list(self.skills or []),
            "createdAt": iso_ts(self.created_at),
            "updatedAt": iso_ts(self.updated_at),
        })
        return d

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
