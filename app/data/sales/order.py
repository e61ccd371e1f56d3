from app import db
from app.data.core.user_created_base import UserCreatedBase

ORDER_STATUSES = ('Open', 'Shipped')
DISCOUNT_TYPES = ('percentage', 'value')


class Order(UserCreatedBase):
    """Sales order; order_no is the date-coded human readable number (SO-YYYYMMDDNNN)"""
    __tablename__ = 'orders'

    order_no = db.Column(db.String(30), unique=True, nullable=False, index=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=False)

    total_amount = db.Column(db.Float, nullable=False, default=0.0)
    discount = db.Column(db.Float, nullable=True)
    discount_type = db.Column(db.String(20), nullable=True, default='percentage')
    note = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='Open')  # Open/Shipped

    # Relationships
    customer = db.relationship('Customer', back_populates='orders')
    order_items = db.relationship(
        'OrderItem',
        back_populates='order',
        order_by='OrderItem.line_number',
        cascade='all, delete-orphan'
    )
    shipment = db.relationship(
        'Shipment',
        back_populates='order',
        uselist=False,
        cascade='all, delete-orphan'
    )

    @property
    def is_shipped(self) -> bool:
        return self.status == 'Shipped' or self.shipment is not None

    def to_api_dict(self):
        data = self.to_dict(camel_case=True)
        data['customer'] = self.customer.to_dict(include_audit_fields=False, camel_case=True) if self.customer else None
        data['orderItems'] = [item.to_api_dict() for item in self.order_items]
        data['shipmentId'] = self.shipment.id if self.shipment else None
        return data

    def __repr__(self):
        return f'<Order {self.id}: {self.order_no} ({self.status})>'
