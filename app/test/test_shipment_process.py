"""
Shipment finalization, the unshipped-orders queue and shipment history
"""

from app import db
from app.data.inventory.stock.stock import Stock
from app.data.sales.order import Order
from app.data.shipment.shipment import Shipment
from app.data.shipment.shipment_item import ShipmentItem
from app.services.shipment.shipment_service import ShipmentService
from app.test.helpers import database_down, order_item_payload

PROCESS_URL = '/api/shipment/process'


def _scan(order_item, unit):
    return {'orderItemId': order_item.id, 'barcode': unit.barcode_id, 'unitKind': unit.unit_kind, 'unitId': unit.id}


def test_end_to_end_two_unit_line(authenticated_client, make_customer, make_stock):
    customer = make_customer()
    reserved = make_stock(barcode='STK-A')
    extra = make_stock(barcode='STK-B')

    created = authenticated_client.post('/api/sales/orders', json={
        'customerId': customer.id,
        'orderItems': [order_item_payload(reserved, quantity=2, price=10000)],
    }).get_json()
    assert created['totalAmount'] == 20000
    item_id = created['orderItems'][0]['id']

    first = authenticated_client.post('/api/shipment/validate-barcode', json={
        'orderId': created['id'], 'barcodeValue': 'STK-A', 'scannedItems': []
    }).get_json()
    second = authenticated_client.post('/api/shipment/validate-barcode', json={
        'orderId': created['id'], 'barcodeValue': 'STK-B', 'scannedItems': [first['scannedItem']]
    }).get_json()
    assert second['orderComplete'] is True

    response = authenticated_client.post(PROCESS_URL, json={
        'orderId': created['id'],
        'scannedItems': [first['scannedItem'], second['scannedItem']],
        'notes': 'Truck 7',
    })

    assert response.status_code == 200
    body = response.get_json()
    assert body['message'] == f"Shipment processed for order {created['orderNo']}"
    shipment = body['shipment']
    assert shipment['notes'] == 'Truck 7'
    assert shipment['processedBy'] == 'admin'
    assert sorted(row['scannedBarcode'] for row in shipment['shipmentItems']) == ['STK-A', 'STK-B']
    assert all(row['orderItemId'] == item_id for row in shipment['shipmentItems'])

    assert db.session.get(Order, created['id']).status == 'Shipped'
    for unit_id in (reserved.id, extra.id):
        unit = db.session.get(Stock, unit_id)
        assert unit.status == 'Sold'
        assert unit.is_sold is True
        assert unit.order_no == created['orderNo']
        assert unit.customer_name == 'Acme Textiles'
        assert unit.sold_length == 1000.0
        assert unit.remaining_length == 0.0
        assert unit.sold_date is not None


def test_line_length_limits_the_sold_length(make_customer, make_stock, make_order, admin_user):
    from app.buisness.shipment.shipment_processor import ShipmentProcessor

    stock = make_stock(length=1000)
    order = make_order(make_customer(), [order_item_payload(stock, length='250m')])

    ShipmentProcessor(admin_user.id).process(order.id, [_scan(order.order_items[0], stock)])

    stock = db.session.get(Stock, stock.id)
    assert stock.sold_length == 250.0
    assert stock.remaining_length == 750.0


def test_incomplete_scan_persists_nothing(authenticated_client, make_customer, make_stock, make_order):
    stock = make_stock()
    order = make_order(make_customer(), [order_item_payload(stock, quantity=2)])
    item = order.order_items[0]

    response = authenticated_client.post(PROCESS_URL, json={
        'orderId': order.id, 'scannedItems': [_scan(item, stock)]
    })

    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'Not all order items have been fully scanned'
    assert body['missing'] == [{'orderItemId': item.id, 'scannedCount': 1, 'requiredQuantity': 2}]
    assert Shipment.query.count() == 0
    assert ShipmentItem.query.count() == 0
    assert db.session.get(Stock, stock.id).status == 'Reserved'
    assert db.session.get(Order, order.id).status == 'Open'


def test_empty_scans_and_missing_order(authenticated_client, make_customer, make_stock, make_order):
    order = make_order(make_customer(), [order_item_payload(make_stock())])
    assert authenticated_client.post(PROCESS_URL, json={'orderId': order.id, 'scannedItems': []}).status_code == 400
    assert authenticated_client.post(PROCESS_URL, json={'scannedItems': []}).status_code == 400
    assert authenticated_client.post(PROCESS_URL, json={'orderId': 999, 'scannedItems': [{}]}).status_code == 404


def test_duplicate_barcode_is_rejected(authenticated_client, make_customer, make_stock, make_order):
    stock = make_stock()
    order = make_order(make_customer(), [order_item_payload(stock, quantity=2)])
    scan = _scan(order.order_items[0], stock)

    response = authenticated_client.post(PROCESS_URL, json={'orderId': order.id, 'scannedItems': [scan, scan]})

    assert response.status_code == 400
    assert 'more than once' in response.get_json()['error']
    assert Shipment.query.count() == 0


def test_barcode_reused_across_items_is_rejected(authenticated_client, make_customer, make_stock, make_order):
    first, second = make_stock(), make_stock()
    order = make_order(make_customer(), [order_item_payload(first), order_item_payload(second)])
    line_one, line_two = order.order_items

    response = authenticated_client.post(PROCESS_URL, json={
        'orderId': order.id,
        'scannedItems': [_scan(line_one, first), _scan(line_two, first)],
    })

    assert response.status_code == 400
    assert 'more than one order item' in response.get_json()['error']


def test_foreign_unit_is_rejected(authenticated_client, make_customer, make_stock, make_order):
    customer = make_customer()
    mine = make_order(customer, [order_item_payload(make_stock())])
    foreign = make_stock()
    make_order(customer, [order_item_payload(foreign)])

    response = authenticated_client.post(PROCESS_URL, json={
        'orderId': mine.id, 'scannedItems': [_scan(mine.order_items[0], foreign)]
    })

    assert response.status_code == 400
    assert db.session.get(Stock, foreign.id).status == 'Reserved'


def test_shipped_order_cannot_ship_again(authenticated_client, make_customer, make_stock, make_order):
    stock = make_stock()
    order = make_order(make_customer(), [order_item_payload(stock)])
    scans = [_scan(order.order_items[0], stock)]
    assert authenticated_client.post(PROCESS_URL, json={'orderId': order.id, 'scannedItems': scans}).status_code == 200

    again = authenticated_client.post(PROCESS_URL, json={'orderId': order.id, 'scannedItems': scans})

    assert again.status_code == 400
    assert 'already been shipped' in again.get_json()['error']
    assert Shipment.query.count() == 1

    edit = authenticated_client.put('/api/sales/orders', json={'id': order.id, 'note': 'late edit'})
    assert edit.status_code == 400


def test_unscanned_reservation_is_released(authenticated_client, make_customer, make_stock, make_order):
    reserved = make_stock(barcode='STK-A')
    substitute = make_stock(barcode='STK-B')
    order = make_order(make_customer(), [order_item_payload(reserved)])

    response = authenticated_client.post(PROCESS_URL, json={
        'orderId': order.id, 'scannedItems': [_scan(order.order_items[0], substitute)]
    })

    assert response.status_code == 200
    reserved = db.session.get(Stock, reserved.id)
    assert reserved.status == 'Available'
    assert reserved.order_id is None
    assert db.session.get(Stock, substitute.id).status == 'Sold'


def test_deleting_shipped_order_returns_units(authenticated_client, make_customer, make_stock, make_order):
    stock = make_stock()
    order = make_order(make_customer(), [order_item_payload(stock)])
    authenticated_client.post(PROCESS_URL, json={
        'orderId': order.id, 'scannedItems': [_scan(order.order_items[0], stock)]
    })

    response = authenticated_client.delete(f'/api/sales/orders?id={order.id}')

    assert response.status_code == 200
    stock = db.session.get(Stock, stock.id)
    assert stock.status == 'Available'
    assert stock.is_sold is False
    assert stock.remaining_length == 1000.0
    assert Shipment.query.count() == 0
    assert ShipmentItem.query.count() == 0


def test_unshipped_queue_and_history(authenticated_client, make_customer, make_stock, make_order):
    shipped_stock = make_stock()
    shipped = make_order(make_customer('Acme Textiles'), [order_item_payload(shipped_stock)])
    waiting = make_order(make_customer('Beta Prints'), [order_item_payload(make_stock())])
    authenticated_client.post(PROCESS_URL, json={
        'orderId': shipped.id, 'scannedItems': [_scan(shipped.order_items[0], shipped_stock)]
    })

    queue = authenticated_client.get('/api/shipment/orders').get_json()
    assert [row['id'] for row in queue['orders']] == [waiting.id]
    assert queue['totalItems'] == 1
    assert queue['totalPages'] == 1
    assert queue['currentPage'] == 1

    searched = authenticated_client.get('/api/shipment/orders?search=acme').get_json()
    assert searched['orders'] == []
    assert searched['totalPages'] == 0

    paged = authenticated_client.get('/api/shipment/orders?page=2&pageSize=1').get_json()
    assert paged['orders'] == []
    assert paged['currentPage'] == 2

    history = authenticated_client.get('/api/shipment/history').get_json()
    assert len(history) == 1
    assert history[0]['orderNo'] == shipped.order_no
    assert history[0]['customerName'] == 'Acme Textiles'
    assert history[0]['itemCount'] == 1

    detail = authenticated_client.get(f"/api/shipment/history/{history[0]['id']}").get_json()
    assert detail['orderItems'][0]['shippedUnits'][0]['scannedBarcode'] == shipped_stock.barcode_id
    assert authenticated_client.get('/api/shipment/history/999').status_code == 404


def test_history_detail_database_failure_is_json_500(authenticated_client, monkeypatch):
    monkeypatch.setattr(ShipmentService, 'shipment_detail', database_down)

    response = authenticated_client.get('/api/shipment/history/1')

    assert response.status_code == 500
    assert response.get_json()['error'] == 'Failed to load shipment'
