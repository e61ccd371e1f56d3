from app import db
from app.data.core.user_created_base import UserCreatedBase
from app.data.inventory.stock.inventory_unit import InventoryUnitMixin


class Divided(InventoryUnitMixin, UserCreatedBase):
    """Sub-roll cut from a stock roll, or received independently (no parent)"""
    __tablename__ = 'divided'

    unit_kind = 'divided'

    roll_no = db.Column(db.String(30), unique=True, nullable=False)
    stock_id = db.Column(db.Integer, db.ForeignKey('stock.id'), nullable=True)

    stock = db.relationship('Stock', back_populates='divided_rolls')

    @property
    def type(self):
        return self.stock.type if self.stock else None

    @property
    def gsm(self):
        return self.stock.gsm if self.stock else None

    def to_api_dict(self, match_reason=None):
        data = super().to_api_dict(match_reason)
        data['type'] = self.type
        data['gsm'] = self.gsm
        data['jumboRollNo'] = self.stock.jumbo_roll_no if self.stock else None
        return data

    def __repr__(self):
        return f'<Divided {self.id}: {self.roll_no} ({self.barcode_id}) {self.status}>'
