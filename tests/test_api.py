import pytest

from conftest import auth, login


@pytest.fixture
def catalog(client, admin_headers):
    """Categoría, producto (stock 5, precio 10.00) y método de pago."""
    r = client.post('/v1/categories', json={'name': 'Bebidas'}, headers=admin_headers)
    category = r.get_json()['data']
    r = client.post('/v1/products', json={
        'name': 'Café', 'category_id': category['id'], 'price': '10.00', 'stock': 5,
    }, headers=admin_headers)
    product = r.get_json()['data']
    r = client.post('/v1/payments', json={'name': 'Efectivo', 'type': 'CASH'}, headers=admin_headers)
    payment = r.get_json()['data']
    return category, product, payment


def test_register_hides_password_and_ignores_role(client):
    r = client.post('/v1/users', json={
        'name': 'Eva', 'email': 'eva@pos.test', 'password': 'clave', 'role': 'admin',
    })
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert body['message'] == 'Success'
    assert 'password' not in body['data']
    assert body['data']['role'] == 'cashier'


def test_register_duplicate_email_is_conflict(client):
    payload = {'name': 'Eva', 'email': 'eva@pos.test', 'password': 'clave'}
    client.post('/v1/users', json=payload)
    r = client.post('/v1/users', json=payload)
    assert r.status_code == 409
    assert r.get_json()['success'] is False


def test_register_requires_fields(client):
    r = client.post('/v1/users', json={'name': 'Eva'})
    assert r.status_code == 400
    assert "'email'" in r.get_json()['error']


def test_login_bad_credentials(client):
    r = client.post('/v1/users/login', json={'email': 'admin@pos.test', 'password': 'mal'})
    assert r.status_code == 401


def test_protected_routes_need_token(client):
    assert client.get('/v1/products').status_code == 401
    r = client.get('/v1/products', headers={'Authorization': 'Bearer basura'})
    assert r.status_code == 401
    r = client.get('/v1/products', headers={'Authorization': 'Basic abc'})
    assert r.status_code == 401


def test_admin_routes_reject_cashier(client, cashier_headers):
    r = client.post('/v1/categories', json={'name': 'X'}, headers=cashier_headers)
    assert r.status_code == 403
    assert client.get('/v1/categories', headers=cashier_headers).status_code == 200


def test_catalog_crud(client, admin_headers, catalog):
    category, product, payment = catalog
    assert product['category']['name'] == 'Bebidas'
    assert product['price'] == '10.00'

    r = client.get('/v1/products?q=caf&category_id=%d' % category['id'], headers=admin_headers)
    assert [p['name'] for p in r.get_json()['data']] == ['Café']

    r = client.put(f"/v1/products/{product['id']}", json={'stock': 8}, headers=admin_headers)
    assert r.get_json()['data']['stock'] == 8

    r = client.put(f"/v1/categories/{category['id']}", json={'name': 'Bebidas'}, headers=admin_headers)
    assert r.status_code == 400

    r = client.put(f"/v1/payments/{payment['id']}", json={'type': 'TARJETA'}, headers=admin_headers)
    assert r.status_code == 400

    r = client.delete(f"/v1/payments/{payment['id']}", headers=admin_headers)
    assert r.status_code == 200
    r = client.get(f"/v1/payments/{payment['id']}", headers=admin_headers)
    assert r.status_code == 404


def test_product_requires_existing_category(client, admin_headers):
    r = client.post('/v1/products', json={
        'name': 'X', 'category_id': 99, 'price': 1, 'stock': 1,
    }, headers=admin_headers)
    assert r.status_code == 404


def test_pagination_validation(client, admin_headers):
    assert client.get('/v1/categories?skip=0', headers=admin_headers).status_code == 400
    assert client.get('/v1/categories?limit=abc', headers=admin_headers).status_code == 400


def test_order_flow(client, cashier_headers, admin_headers, catalog):
    _, product, payment = catalog
    r = client.post('/v1/orders', json={
        'payment_id': payment['id'],
        'customer_name': 'Cliente',
        'total_paid': 40,
        'products': [{'product_id': product['id'], 'quantity': 3}],
    }, headers=cashier_headers)

    assert r.status_code == 200
    order = r.get_json()['data']
    assert order['total_price'] == '30.00'
    assert order['total_return'] == '10.00'
    assert order['user']['email'] == 'caja1@pos.test'
    assert 'password' not in order['user']
    assert order['products'][0]['product']['category']['name'] == 'Bebidas'

    r = client.get(f"/v1/products/{product['id']}", headers=admin_headers)
    assert r.get_json()['data']['stock'] == 2

    r = client.get(f"/v1/orders/{order['id']}", headers=cashier_headers)
    assert r.get_json()['data']['receipt_code'] == order['receipt_code']

    r = client.get('/v1/orders?skip=1&limit=10', headers=cashier_headers)
    assert [o['id'] for o in r.get_json()['data']] == [order['id']]


def test_order_business_errors(client, cashier_headers, catalog):
    _, product, payment = catalog
    base = {'payment_id': payment['id'], 'total_paid': 1000}

    r = client.post('/v1/orders', json=dict(base, products=[
        {'product_id': product['id'], 'quantity': 6}]), headers=cashier_headers)
    assert r.status_code == 400

    r = client.post('/v1/orders', json=dict(base, total_paid=5, products=[
        {'product_id': product['id'], 'quantity': 1}]), headers=cashier_headers)
    assert r.status_code == 400

    r = client.post('/v1/orders', json=dict(base, products=[
        {'product_id': 999, 'quantity': 1}]), headers=cashier_headers)
    assert r.status_code == 404

    r = client.post('/v1/orders', json=dict(base, products=[]), headers=cashier_headers)
    assert r.status_code == 400

    r = client.post('/v1/orders', json=dict(base, products=[
        {'product_id': product['id'], 'quantity': 0}]), headers=cashier_headers)
    assert r.status_code == 400


def test_order_with_unknown_payment_is_not_persisted(client, cashier_headers, admin_headers, catalog):
    _, product, _ = catalog
    r = client.post('/v1/orders', json={
        'payment_id': 999,
        'total_paid': 10,
        'products': [{'product_id': product['id'], 'quantity': 1}],
    }, headers=cashier_headers)
    assert r.status_code == 404

    r = client.get(f"/v1/products/{product['id']}", headers=admin_headers)
    assert r.get_json()['data']['stock'] == 5

    r = client.get('/v1/orders?skip=1&limit=10', headers=cashier_headers)
    assert r.status_code == 200
    assert r.get_json()['data'] == []


def test_user_admin_routes(client, admin_headers):
    r = client.post('/v1/users', json={'name': 'Eva', 'email': 'eva@pos.test', 'password': 'clave'})
    user_id = r.get_json()['data']['id']

    r = client.put(f'/v1/users/{user_id}', json={'role': 'admin'}, headers=admin_headers)
    assert r.get_json()['data']['role'] == 'admin'

    eva = auth(login(client, 'eva@pos.test', 'clave'))
    assert client.delete(f'/v1/users/{user_id}', headers=eva).status_code == 200
    assert client.get(f'/v1/users/{user_id}', headers=admin_headers).status_code == 404


def test_unknown_route_is_json(client):
    r = client.get('/v1/nada')
    assert r.status_code == 404
    assert r.get_json()['success'] is False
