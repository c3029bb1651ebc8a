from ..extensions import db
from .types import DecimalText, utcnow, iso_date, iso_timestamp


class Advance(db.Model):
    __tablename__ = "advance"

    id = db.Column(db.String(40), primary_key=True)
    # no ForeignKey: orphaned advances are allowed, worker deletion cascades in the store
    worker_id = db.Column(db.String(40), nullable=False, index=True)
    amount = db.Column(DecimalText, nullable=False, default=0)
    date = db.Column(db.Date, nullable=False, index=True)
    note = db.Column(db.Text, default="")
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    # position in the collection, keeps list/export order stable across imports
    seq = db.Column(db.Integer, nullable=False, default=0, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workerId": self.worker_id,
            "amount": str(self.amount),
            "date": iso_date(self.date),
            "note": self.note or "",
            "createdAt": iso_timestamp(self.created_at),
        }
