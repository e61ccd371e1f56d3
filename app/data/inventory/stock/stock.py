from app import db
from app.data.core.user_created_base import UserCreatedBase
from app.data.inventory.stock.inventory_unit import InventoryUnitMixin


class Stock(InventoryUnitMixin, UserCreatedBase):
    """Whole jumbo roll received in a container"""
    __tablename__ = 'stock'

    unit_kind = 'stock'

    jumbo_roll_no = db.Column(db.String(30), unique=True, nullable=False)
    type = db.Column(db.String(100), nullable=False)
    gsm = db.Column(db.Float, nullable=False)
    weight = db.Column(db.Float, nullable=False)
    container_no = db.Column(db.String(50), nullable=False)
    arrival_date = db.Column(db.DateTime, nullable=True)

    divided_rolls = db.relationship('Divided', back_populates='stock')

    def __repr__(self):
        return f'<Stock {self.id}: {self.jumbo_roll_no} ({self.barcode_id}) {self.status}>'
