import math

from app import db
from app.data.core.user_created_base import UserCreatedBase

UNIT_KINDS = ('stock', 'divided')


class OrderItem(UserCreatedBase):
    """
    Order line referencing exactly one inventory unit.

    unit_kind is decided once when the line is written and tells which of
    stock_id / divided_id is set. Specification columns (type, gsm, width,
    length, weight) are kept as the operator entered them.
    """
    __tablename__ = 'order_items'

    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    line_number = db.Column(db.Integer, nullable=False)

    type = db.Column(db.String(100), nullable=False)
    product = db.Column(db.String(100), nullable=True)
    gsm = db.Column(db.String(50), nullable=True)
    width = db.Column(db.String(50), nullable=True)
    length = db.Column(db.String(50), nullable=True)
    weight = db.Column(db.String(50), nullable=True)

    quantity = db.Column(db.Float, nullable=False)
    price = db.Column(db.Float, nullable=False)
    tax = db.Column(db.Float, nullable=True)

    unit_kind = db.Column(db.String(10), nullable=False)  # stock/divided
    stock_id = db.Column(db.Integer, db.ForeignKey('stock.id'), nullable=True)
    divided_id = db.Column(db.Integer, db.ForeignKey('divided.id'), nullable=True)

    __table_args__ = (
        db.CheckConstraint(
            "(stock_id IS NULL) <> (divided_id IS NULL)",
            name='ck_order_items_single_unit'
        ),
    )

    # Relationships
    order = db.relationship('Order', back_populates='order_items')
    stock = db.relationship('Stock', foreign_keys=[stock_id])
    divided = db.relationship('Divided', foreign_keys=[divided_id])
    shipment_items = db.relationship('ShipmentItem', back_populates='order_item', cascade='all')

    @property
    def unit(self):
        return self.stock if self.unit_kind == 'stock' else self.divided

    @property
    def unit_id(self):
        return self.stock_id if self.unit_kind == 'stock' else self.divided_id

    @property
    def required_quantity(self) -> int:
        """Number of distinct units that must be scanned for this line"""
        if not self.quantity or self.quantity <= 0:
            return 1
        return max(1, math.ceil(self.quantity))

    def to_api_dict(self):
        data = self.to_dict(include_audit_fields=False, camel_case=True)
        data['productId'] = self.unit_id
        data['requiredQuantity'] = self.required_quantity
        return data

    def __repr__(self):
        return f'<OrderItem {self.id}: order {self.order_id} line {self.line_number} {self.unit_kind}:{self.unit_id}>'
