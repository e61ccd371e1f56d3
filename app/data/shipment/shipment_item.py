from app import db
from app.data.core.user_created_base import UserCreatedBase


class ShipmentItem(UserCreatedBase):
    """One scanned physical unit fulfilling an order line"""
    __tablename__ = 'shipment_items'

    shipment_id = db.Column(db.Integer, db.ForeignKey('shipments.id'), nullable=False)
    order_item_id = db.Column(db.Integer, db.ForeignKey('order_items.id'), nullable=False)
    scanned_barcode = db.Column(db.String(100), nullable=False)

    unit_kind = db.Column(db.String(10), nullable=False)  # stock/divided
    stock_id = db.Column(db.Integer, db.ForeignKey('stock.id'), nullable=True)
    divided_id = db.Column(db.Integer, db.ForeignKey('divided.id'), nullable=True)

    __table_args__ = (
        db.CheckConstraint(
            "(stock_id IS NULL) <> (divided_id IS NULL)",
            name='ck_shipment_items_single_unit'
        ),
    )

    # Relationships
    shipment = db.relationship('Shipment', back_populates='shipment_items')
    order_item = db.relationship('OrderItem', back_populates='shipment_items')
    stock = db.relationship('Stock', foreign_keys=[stock_id])
    divided = db.relationship('Divided', foreign_keys=[divided_id])

    @property
    def unit(self):
        return self.stock if self.unit_kind == 'stock' else self.divided

    def to_api_dict(self):
        data = self.to_dict(include_audit_fields=False, camel_case=True)
        unit = self.unit
        data['inventoryItem'] = unit.to_api_dict() if unit is not None else None
        return data

    def __repr__(self):
        return f'<ShipmentItem {self.id}: {self.scanned_barcode} -> order item {self.order_item_id}>'
