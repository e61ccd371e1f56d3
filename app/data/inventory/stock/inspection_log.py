from app import db
from app.data.core.user_created_base import UserCreatedBase

INSPECTION_LOG_TYPES = ('stock_inspected', 'divided_inspected')


class InspectionLog(UserCreatedBase):
    """
    Append-only record of a roll inspection.

    item_identifier keeps the jumbo/divided roll number so the entry stays
    readable after the roll itself is deleted (stock_id / divided_id are
    cleared then).
    """
    __tablename__ = 'inspection_logs'

    type = db.Column(db.String(30), nullable=False)
    item_type = db.Column(db.String(10), nullable=False)  # stock/divided
    item_identifier = db.Column(db.String(30), nullable=False)

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    user_name = db.Column(db.String(80), nullable=True)
    note = db.Column(db.Text, nullable=True)

    stock_id = db.Column(db.Integer, db.ForeignKey('stock.id'), nullable=True)
    divided_id = db.Column(db.Integer, db.ForeignKey('divided.id'), nullable=True)

    user = db.relationship('User', foreign_keys=[user_id])

    def to_api_dict(self):
        data = self.to_dict(include_audit_fields=False, camel_case=True)
        data['createdAt'] = self.created_at.isoformat() if self.created_at else None
        return data

    def __repr__(self):
        return f'<InspectionLog {self.id}: {self.type} {self.item_identifier}>'
