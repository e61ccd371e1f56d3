from app import db
from sqlalchemy.orm import declared_attr

UNIT_STATUSES = ('Available', 'Reserved', 'Sold')


class InventoryUnitMixin:
    """
    Columns shared by every sellable roll (Stock and Divided).

    status is the source of truth; is_sold mirrors status == 'Sold' and is kept
    for listings that only care about sold/unsold. order_id is set at the
    reservation transition and kept through the sale.
    """

    # barcode uniqueness across both tables is enforced at intake
    barcode_id = db.Column(db.String(100), unique=True, nullable=False, index=True)
    width = db.Column(db.Float, nullable=False)
    length = db.Column(db.Float, nullable=False)
    remaining_length = db.Column(db.Float, nullable=False, default=0)

    status = db.Column(db.String(20), nullable=False, default='Available')  # Available/Reserved/Sold
    is_sold = db.Column(db.Boolean, nullable=False, default=False)
    order_no = db.Column(db.String(30), nullable=True, index=True)
    sold_date = db.Column(db.DateTime, nullable=True)
    customer_name = db.Column(db.String(200), nullable=True)
    sold_length = db.Column(db.Float, nullable=True)

    inspected = db.Column(db.Boolean, nullable=False, default=False)
    inspected_at = db.Column(db.DateTime, nullable=True)
    note = db.Column(db.Text, nullable=True)

    # "stock" / "divided"; set by each model
    unit_kind = None

    @declared_attr
    def order_id(cls):
        return db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=True, index=True)

    @declared_attr
    def inspected_by_id(cls):
        return db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)

    @declared_attr
    def order(cls):
        return db.relationship('Order', foreign_keys=[cls.order_id])

    @property
    def is_available(self) -> bool:
        return self.status == 'Available'

    def to_api_dict(self, match_reason=None):
        data = self.to_dict(include_audit_fields=False, camel_case=True)
        data['unitKind'] = self.unit_kind
        if match_reason:
            data['matchReason'] = match_reason
        return data
