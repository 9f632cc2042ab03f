from decimal import Decimal

import pytest

from app_pos.app_container import AppContainer
from app_pos.main import create_app
from app_pos.models import Category, Payment, PaymentType, Product, User, UserRole

ADMIN_EMAIL = 'admin@pos.test'
ADMIN_PASSWORD = 'admin-1234'


@pytest.fixture
def container(tmp_path):
    c = AppContainer(data_dir=str(tmp_path / 'data'), secret_key='test-secret')
    yield c
    c.close()


@pytest.fixture
def cache(container):
    return container.cache


@pytest.fixture
def category(container):
    return container.category_service.create_category(Category(name='Bebidas'))


@pytest.fixture
def product(container, category):
    return container.product_service.create_product(
        Product(name='Café', category_id=category.id, stock=5, price=Decimal('10.00'))
    )


@pytest.fixture
def payment(container):
    return container.payment_service.create_payment(
        Payment(name='Efectivo', type=PaymentType.CASH)
    )


@pytest.fixture
def cashier(container):
    return container.user_service.register(
        User(name='Ana', email='ana@pos.test', password='secreto-1')
    )


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'DATA_DIR': str(tmp_path / 'api-data'),
        'SECRET_KEY': 'test-secret',
        'ENABLE_PROFILING': False,
        'ADMIN_NAME': 'Admin',
        'ADMIN_EMAIL': ADMIN_EMAIL,
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
    })
    yield app
    app.extensions['app_pos'].close()


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


def login(client, email, password):
    r = client.post('/v1/users/login', json={'email': email, 'password': password})
    assert r.status_code == 200, r.get_json()
    return r.get_json()['data']['token']


def auth(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_headers(client):
    return auth(login(client, ADMIN_EMAIL, ADMIN_PASSWORD))


@pytest.fixture
def cashier_headers(client):
    r = client.post('/v1/users', json={
        'name': 'Caja 1', 'email': 'caja1@pos.test', 'password': 'caja-1234'
    })
    assert r.status_code == 200
    assert r.get_json()['data']['role'] == UserRole.CASHIER.value
    return auth(login(client, 'caja1@pos.test', 'caja-1234'))
