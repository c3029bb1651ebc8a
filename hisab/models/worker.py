from ..extensions import db
from .types import DecimalText, utcnow, iso_date, iso_timestamp


class Worker(db.Model):
    __tablename__ = "worker"

    id = db.Column(db.String(40), primary_key=True)
    name = db.Column(db.String(180), nullable=False, index=True)
    designation = db.Column(db.String(180), default="")
    salary = db.Column(DecimalText, nullable=False, default=0)
    joining_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    # position in the collection, keeps list/export order stable across imports
    seq = db.Column(db.Integer, nullable=False, default=0, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "designation": self.designation or "",
            "salary": str(self.salary),
            "joiningDate": iso_date(self.joining_date),
            "createdAt": iso_timestamp(self.created_at),
        }
