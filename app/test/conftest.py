"""
Pytest configuration and fixtures for the roll ERP
"""
import os
import tempfile

# create_app() reads these at construction time
os.environ['SECRET_KEY'] = 'test-secret-key'
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['ENABLE_HTTPS'] = 'False'
os.environ['FORCE_HTTPS_REDIRECT'] = 'False'
os.environ['SESSION_COOKIE_SECURE'] = 'False'
os.environ['REMEMBER_COOKIE_SECURE'] = 'False'
os.environ['RATELIMIT_ENABLED'] = 'False'
os.environ['LOG_DIR'] = os.path.join(tempfile.gettempdir(), 'roll_erp_test_logs')

import pytest  # noqa: E402
from app import create_app  # noqa: E402
from app import db as _db  # noqa: E402

from app.test.helpers import ADMIN_PASSWORD, ADMIN_USERNAME, login_user  # noqa: E402


@pytest.fixture(scope='session')
def app():
    """Create Flask application for testing"""
    app = create_app()
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    return app


@pytest.fixture(scope='function', autouse=True)
def db(app):
    """Fresh schema and admin user for every test, inside its own app context"""
    from app.data.core.user_info.user import User

    with app.app_context():
        _db.drop_all()
        _db.create_all()
        admin = User(username=ADMIN_USERNAME, email='admin@example.com', is_admin=True)
        admin.set_password(ADMIN_PASSWORD)
        _db.session.add(admin)
        _db.session.commit()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def authenticated_client(client):
    """Test client logged in as the admin user"""
    response = login_user(client)
    assert response.status_code == 200
    return client


@pytest.fixture
def admin_user(db):
    from app.data.core.user_info.user import User
    return User.query.filter_by(username=ADMIN_USERNAME).first()


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_customer(db):
    from app.data.core.customer import Customer

    def _make(name='Acme Textiles', **kwargs):
        customer = Customer(name=name, **kwargs)
        db.session.add(customer)
        db.session.commit()
        return customer
    return _make


@pytest.fixture
def make_stock(db):
    from app.data.inventory.stock.stock import Stock

    counter = {'n': 0}

    def _make(barcode=None, type='Sublimation Paper', gsm=80, width=1600, length=1000, **kwargs):
        counter['n'] += 1
        n = counter['n']
        stock = Stock(
            jumbo_roll_no=kwargs.pop('jumbo_roll_no', f'SHZ2501{n:04d}'),
            barcode_id=barcode or f'STK-{n:04d}',
            type=type,
            gsm=gsm,
            width=width,
            length=length,
            remaining_length=kwargs.pop('remaining_length', length),
            weight=kwargs.pop('weight', 120),
            container_no=kwargs.pop('container_no', 'CONT-1'),
            inspected=kwargs.pop('inspected', True),
            **kwargs
        )
        db.session.add(stock)
        db.session.commit()
        return stock
    return _make


@pytest.fixture
def make_divided(db):
    from app.data.inventory.stock.divided import Divided

    counter = {'n': 0}

    def _make(barcode=None, stock=None, width=160, length=100, **kwargs):
        counter['n'] += 1
        n = counter['n']
        divided = Divided(
            roll_no=kwargs.pop('roll_no', f'SHZ-0125{n:04d}AA'),
            barcode_id=barcode or f'DIV-{n:04d}',
            stock_id=stock.id if stock else None,
            width=width,
            length=length,
            remaining_length=kwargs.pop('remaining_length', length),
            **kwargs
        )
        db.session.add(divided)
        db.session.commit()
        return divided
    return _make


@pytest.fixture
def make_order(db, admin_user):
    from app.buisness.sales.order_manager import OrderManager

    def _make(customer, items, **payload):
        payload.update({'customerId': customer.id, 'orderItems': items})
        return OrderManager(user_id=admin_user.id).create_order(payload)
    return _make
