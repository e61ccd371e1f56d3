"""
Order create / update / delete through the sales API, including the
inventory side effects each one has
"""

from datetime import date

from app import db
from app.data.inventory.stock.divided import Divided
from app.data.inventory.stock.stock import Stock
from app.data.sales.order import Order
from app.data.sales.order_item import OrderItem
from app.services.sales.order_service import OrderService
from app.test.helpers import database_down, order_item_payload


def _create(client, customer, items, **extra):
    body = {'customerId': customer.id, 'orderItems': items}
    body.update(extra)
    return client.post('/api/sales/orders', json=body)


def test_create_order_totals_and_reserves(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    stock = make_stock()

    response = _create(authenticated_client, customer, [order_item_payload(stock, quantity=2, price=10000)])

    assert response.status_code == 200
    order = response.get_json()
    assert order['totalAmount'] == 20000
    assert isinstance(order['totalAmount'], float)
    assert order['orderNo'] == f"SO-{date.today():%Y%m%d}001"
    assert order['status'] == 'Open'
    assert order['orderItems'][0]['unitKind'] == 'stock'
    assert order['orderItems'][0]['requiredQuantity'] == 2

    stock = db.session.get(Stock, stock.id)
    assert stock.status == 'Reserved'
    assert stock.order_id == order['id']
    assert stock.order_no == order['orderNo']
    assert stock.is_sold is False
    assert stock.remaining_length == 1000.0


def test_create_with_discounts(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    percent = _create(authenticated_client, customer, [order_item_payload(make_stock(), price=50000)],
                      discount=10, discountType='percentage')
    assert percent.get_json()['totalAmount'] == 45000

    value = _create(authenticated_client, customer, [order_item_payload(make_stock(), price=100000)],
                    discount=150000, discountType='value')
    assert value.get_json()['totalAmount'] == 0


def test_create_uses_client_total(authenticated_client, make_customer, make_stock):
    response = _create(authenticated_client, make_customer(), [order_item_payload(make_stock())],
                       totalAmount='12000')
    assert response.get_json()['totalAmount'] == 12000.0


def test_sublimation_roll_resolves_to_divided(authenticated_client, make_customer, make_divided):
    divided = make_divided()
    item = order_item_payload(divided)
    del item['unitKind']
    response = _create(authenticated_client, make_customer(), [item])
    assert response.status_code == 200
    assert response.get_json()['orderItems'][0]['dividedId'] == divided.id
    assert db.session.get(Divided, divided.id).status == 'Reserved'


def test_validation_errors_persist_nothing(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    stock = make_stock()
    cases = [
        {'orderItems': [order_item_payload(stock)]},
        {'customerId': customer.id, 'orderItems': []},
        {'customerId': customer.id, 'orderItems': [order_item_payload(stock, price=None)]},
        {'customerId': customer.id, 'orderItems': [order_item_payload(stock)], 'discount': 101},
        {'customerId': customer.id, 'orderItems': [order_item_payload(stock)], 'discount': -5,
         'discountType': 'value'},
    ]
    for body in cases:
        response = authenticated_client.post('/api/sales/orders', json=body)
        assert response.status_code == 400, body
        assert 'error' in response.get_json()

    assert Order.query.count() == 0
    assert db.session.get(Stock, stock.id).status == 'Available'


def test_missing_customer_or_unit_is_404(authenticated_client, make_customer, make_stock):
    stock = make_stock()
    response = authenticated_client.post('/api/sales/orders', json={
        'customerId': 999, 'orderItems': [order_item_payload(stock)]
    })
    assert response.status_code == 404

    item = order_item_payload(stock)
    item['productId'] = 999
    response = _create(authenticated_client, make_customer(), [item])
    assert response.status_code == 404
    assert Order.query.count() == 0


def test_unit_already_reserved_is_rejected(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    stock = make_stock()
    assert _create(authenticated_client, customer, [order_item_payload(stock)]).status_code == 200

    response = _create(authenticated_client, customer, [order_item_payload(stock)])
    assert response.status_code == 400
    assert Order.query.count() == 1


def test_order_number_gap_is_reused(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    numbers = [
        _create(authenticated_client, customer, [order_item_payload(make_stock())]).get_json()
        for _ in range(3)
    ]
    middle = numbers[1]
    assert authenticated_client.delete(f"/api/sales/orders?id={middle['id']}").status_code == 200

    again = _create(authenticated_client, customer, [order_item_payload(make_stock())]).get_json()
    assert again['orderNo'] == middle['orderNo']


def test_update_replaces_items_and_moves_reservations(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    old_stock, new_stock = make_stock(), make_stock()
    order = _create(authenticated_client, customer, [order_item_payload(old_stock, price=1000)]).get_json()

    response = authenticated_client.put('/api/sales/orders', json={
        'id': order['id'],
        'orderItems': [order_item_payload(new_stock, quantity=3, price=2000)],
        'discount': 1000,
        'discountType': 'value',
        'note': 'revised',
    })

    assert response.status_code == 200
    updated = response.get_json()
    assert updated['totalAmount'] == 5000
    assert updated['note'] == 'revised'
    assert [item['stockId'] for item in updated['orderItems']] == [new_stock.id]
    assert OrderItem.query.count() == 1
    assert db.session.get(Stock, old_stock.id).status == 'Available'
    assert db.session.get(Stock, old_stock.id).order_id is None
    assert db.session.get(Stock, new_stock.id).status == 'Reserved'


def test_update_without_items_reprices_existing_lines(authenticated_client, make_customer, make_stock):
    order = _create(authenticated_client, make_customer(), [order_item_payload(make_stock(), quantity=2, price=500)]).get_json()
    response = authenticated_client.put('/api/sales/orders', json={'id': order['id'], 'discount': 50})
    assert response.status_code == 200
    assert response.get_json()['totalAmount'] == 500


def test_update_missing_order_is_404(authenticated_client):
    response = authenticated_client.put('/api/sales/orders', json={'id': 12345, 'note': 'x'})
    assert response.status_code == 404


def test_update_rejects_invalid_discount(authenticated_client, make_customer, make_stock):
    order = _create(authenticated_client, make_customer(), [order_item_payload(make_stock())]).get_json()
    response = authenticated_client.put('/api/sales/orders', json={'id': order['id'], 'discount': 150})
    assert response.status_code == 400


def test_delete_releases_reserved_units(authenticated_client, make_customer, make_stock):
    stock = make_stock()
    order = _create(authenticated_client, make_customer(), [order_item_payload(stock)]).get_json()

    response = authenticated_client.delete(f"/api/sales/orders?id={order['id']}")

    assert response.status_code == 200
    assert response.get_json() == {
        'success': True,
        'message': f"Order {order['orderNo']} deleted successfully",
        'orderNo': order['orderNo'],
    }
    stock = db.session.get(Stock, stock.id)
    assert stock.status == 'Available'
    assert stock.order_no is None
    assert Order.query.count() == 0
    assert OrderItem.query.count() == 0


def test_delete_resets_sold_units_and_restores_length(authenticated_client, make_customer, make_stock):
    stock = make_stock()
    order = _create(authenticated_client, make_customer(), [order_item_payload(stock)]).get_json()
    stock = db.session.get(Stock, stock.id)
    stock.status, stock.is_sold = 'Sold', True
    stock.sold_length, stock.remaining_length = 400.0, 600.0
    stock.customer_name = 'Acme Textiles'
    db.session.commit()

    authenticated_client.delete(f"/api/sales/orders?id={order['id']}")

    stock = db.session.get(Stock, stock.id)
    assert stock.is_sold is False
    assert stock.status == 'Available'
    assert stock.remaining_length == 1000.0
    assert stock.order_no is None and stock.sold_date is None and stock.customer_name is None


def test_delete_leaves_reassigned_unit_alone(authenticated_client, make_customer, make_stock):
    stock = make_stock()
    order = _create(authenticated_client, make_customer(), [order_item_payload(stock)]).get_json()
    stock = db.session.get(Stock, stock.id)
    stock.status, stock.is_sold = 'Sold', True
    stock.order_no = 'SO-20991231001'
    stock.sold_length, stock.remaining_length = 400.0, 600.0
    db.session.commit()

    assert authenticated_client.delete(f"/api/sales/orders?id={order['id']}").status_code == 200

    stock = db.session.get(Stock, stock.id)
    assert stock.is_sold is True
    assert stock.order_no == 'SO-20991231001'
    assert stock.remaining_length == 600.0


def test_delete_errors(authenticated_client):
    assert authenticated_client.delete('/api/sales/orders').status_code == 400
    assert authenticated_client.delete('/api/sales/orders?id=404').status_code == 404


def test_listing_and_detail(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    first = _create(authenticated_client, customer, [order_item_payload(make_stock())]).get_json()
    second = _create(authenticated_client, customer, [order_item_payload(make_stock())]).get_json()

    listing = authenticated_client.get('/api/sales/orders').get_json()
    assert [row['id'] for row in listing] == [second['id'], first['id']]
    assert listing[0]['customerName'] == 'Acme Textiles'
    assert listing[0]['type'] == 'Sublimation Paper'

    detail = authenticated_client.get(f"/api/sales/orders/{first['id']}")
    assert detail.status_code == 200
    assert detail.get_json()['customer']['name'] == 'Acme Textiles'
    assert authenticated_client.get('/api/sales/orders/999').status_code == 404


def test_detail_database_failure_is_json_500(authenticated_client, monkeypatch):
    monkeypatch.setattr(OrderService, 'get_order', database_down)

    response = authenticated_client.get('/api/sales/orders/1')

    assert response.status_code == 500
    assert response.get_json()['error'] == 'Failed to load order'


def test_customers_api(authenticated_client):
    assert authenticated_client.post('/api/sales/customers', json={'phone': '1'}).status_code == 400
    response = authenticated_client.post('/api/sales/customers', json={'name': 'Beta Prints', 'phone': '555'})
    assert response.status_code == 200
    assert [c['name'] for c in authenticated_client.get('/api/sales/customers').get_json()] == ['Beta Prints']


def test_orders_require_login(client):
    assert client.post('/api/sales/orders', json={}).status_code == 401
