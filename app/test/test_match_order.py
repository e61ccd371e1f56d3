"""
Candidate lookup for a scanning session by order number
"""

from app import db
from app.data.inventory.stock.stock import Stock
from app.services.inventory.match_order_service import MatchOrderService
from app.test.helpers import database_down, order_item_payload


def test_unknown_order_returns_empty_lists():
    assert MatchOrderService.match_candidates('SO-19990101001') == {
        'stockItems': [], 'dividedItems': [], 'orderItems': []
    }


def test_reserved_units_and_lines_are_returned(make_customer, make_stock, make_divided, make_order):
    stock = make_stock()
    divided = make_divided()
    order = make_order(make_customer(), [order_item_payload(stock), order_item_payload(divided)])

    result = MatchOrderService.match_candidates(order.order_no)

    assert [unit['id'] for unit in result['stockItems']] == [stock.id]
    assert result['stockItems'][0]['matchReason'] == 'reserved'
    assert [unit['id'] for unit in result['dividedItems']] == [divided.id]
    assert [item['lineNumber'] for item in result['orderItems']] == [1, 2]


def test_order_number_alone_does_not_link_a_unit(make_customer, make_stock, make_order):
    stock = make_stock()
    order = make_order(make_customer(), [order_item_payload(stock)])
    tagged = make_stock(status='Sold', is_sold=True, order_no=order.order_no)

    result = MatchOrderService.match_candidates(order.order_no)

    assert [unit['id'] for unit in result['stockItems']] == [stock.id]
    assert tagged.id != stock.id


def test_unit_is_listed_once(make_customer, make_stock, make_order):
    stock = make_stock()
    order = make_order(make_customer(), [order_item_payload(stock)])
    # Referenced by the line and by order_id; the order_id reason wins
    result = MatchOrderService.match_candidates(order.order_no)
    assert len(result['stockItems']) == 1
    assert db.session.get(Stock, stock.id).order_id == order.id


def test_match_order_endpoint(authenticated_client, make_customer, make_stock, make_order):
    order = make_order(make_customer(), [order_item_payload(make_stock())])

    assert authenticated_client.get('/api/inventory/match-order').status_code == 400

    response = authenticated_client.get(f'/api/inventory/match-order?orderNo={order.order_no}')
    assert response.status_code == 200
    assert len(response.get_json()['stockItems']) == 1


def test_database_failure_degrades_to_empty_lists(authenticated_client, monkeypatch):
    monkeypatch.setattr(MatchOrderService, 'match_candidates', database_down)

    response = authenticated_client.get('/api/inventory/match-order?orderNo=SO-20250101001')

    assert response.status_code == 200
    assert response.get_json() == {'stockItems': [], 'dividedItems': [], 'orderItems': []}
