from datetime import datetime

from app import db
from app.data.core.user_created_base import UserCreatedBase


class Shipment(UserCreatedBase):
    """Physically verified dispatch of one order (one shipment per order)"""
    __tablename__ = 'shipments'

    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), unique=True, nullable=False)
    processed_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    shipment_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    order = db.relationship('Order', back_populates='shipment')
    processed_by = db.relationship('User', foreign_keys=[processed_by_id])
    shipment_items = db.relationship(
        'ShipmentItem',
        back_populates='shipment',
        order_by='ShipmentItem.id',
        cascade='all, delete-orphan'
    )

    def to_api_dict(self):
        data = self.to_dict(camel_case=True)
        data['orderNo'] = self.order.order_no if self.order else None
        data['processedBy'] = self.processed_by.username if self.processed_by else None
        data['shipmentItems'] = [item.to_api_dict() for item in self.shipment_items]
        return data

    def __repr__(self):
        return f'<Shipment {self.id}: order {self.order_id}>'
