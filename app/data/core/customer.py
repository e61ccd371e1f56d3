from app import db
from app.data.core.user_created_base import UserCreatedBase


class Customer(UserCreatedBase):
    """Party an order is sold to"""
    __tablename__ = 'customers'

    name = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(50), nullable=True)
    address = db.Column(db.Text, nullable=True)
    email = db.Column(db.String(120), nullable=True)

    orders = db.relationship('Order', back_populates='customer')

    def __repr__(self):
        return f'<Customer {self.id}: {self.name}>'
