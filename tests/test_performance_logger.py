from decimal import Decimal

import pytest

from app_pos import performance_logger
from app_pos.main import create_app
from app_pos.models import InsufficientPaymentError, Order, OrderProduct


@pytest.fixture(autouse=True)
def clean_stats():
    previous = performance_logger.is_profiling_enabled()
    performance_logger.set_profiling_enabled(True)
    performance_logger.reset_stats()
    yield
    performance_logger.reset_stats()
    performance_logger.set_profiling_enabled(previous)


def _sell_one(container, cashier, payment, product):
    return container.order_service.create_order(Order(
        user_id=cashier.id, payment_id=payment.id, total_paid=Decimal('10'),
        products=[OrderProduct(product_id=product.id, quantity=1)],
    ))


def test_use_case_stats_count_calls_and_errors(container, cashier, payment, product):
    service = container.order_service
    _sell_one(container, cashier, payment, product)
    with pytest.raises(InsufficientPaymentError):
        service.create_order(Order(
            user_id=cashier.id, payment_id=payment.id, total_paid=Decimal('1'),
            products=[OrderProduct(product_id=product.id, quantity=1)],
        ))

    stats = performance_logger.get_function_stats()['Crear orden']
    assert stats['calls'] == 2
    assert stats['errors'] == 1
    assert stats['max_ms'] >= stats['avg_ms'] >= 0


def test_requests_are_logged_one_line_each(tmp_path, monkeypatch):
    monkeypatch.setattr(performance_logger, 'LOGS_DIR', str(tmp_path / 'logs'))
    app = create_app({
        'TESTING': True,
        'DATA_DIR': str(tmp_path / 'data'),
        'ENABLE_PROFILING': True,
        'ADMIN_EMAIL': None,
    })

    with app.test_client() as client:
        client.post('/v1/users/login', json={'email': 'x@pos.test', 'password': 'x'})
        client.get('/v1/orders')

    with open(tmp_path / 'logs' / 'requests.log', encoding='utf-8') as f:
        lines = f.read().splitlines()

    assert len(lines) == 2
    assert 'Iniciar sesión' in lines[0]
    assert 'POST /v1/users/login' in lines[0]
    assert 'Listar órdenes' in lines[1]
    assert 'user=-' in lines[1]


def test_profiling_can_be_disabled(tmp_path, monkeypatch):
    monkeypatch.setattr(performance_logger, 'LOGS_DIR', str(tmp_path / 'logs'))
    app = create_app({'DATA_DIR': str(tmp_path / 'data'), 'ENABLE_PROFILING': False,
                      'ADMIN_EMAIL': None})

    with app.test_client() as client:
        client.get('/v1/orders')

    assert not (tmp_path / 'logs' / 'requests.log').exists()
    assert performance_logger.get_function_stats() == {}


def test_app_config_disables_use_case_stats(tmp_path, container, cashier, payment, product):
    create_app({'DATA_DIR': str(tmp_path / 'data'), 'ENABLE_PROFILING': False,
                'ADMIN_EMAIL': None})

    _sell_one(container, cashier, payment, product)

    assert performance_logger.get_function_stats() == {}
    assert container.product_repo.get_product_by_id(product.id).stock == 4


def test_app_config_enables_use_case_stats(tmp_path, monkeypatch, container, cashier, payment, product):
    monkeypatch.setattr(performance_logger, 'LOGS_DIR', str(tmp_path / 'logs'))
    performance_logger.set_profiling_enabled(False)
    create_app({'DATA_DIR': str(tmp_path / 'data'), 'ENABLE_PROFILING': True,
                'ADMIN_EMAIL': None, 'TESTING': True})

    _sell_one(container, cashier, payment, product)

    assert performance_logger.get_function_stats()['Crear orden']['calls'] == 1


def test_record_format():
    line = performance_logger.format_record('WARNING', 'Crear orden', 412.4, 3, 'POST /v1/orders')
    assert line.endswith('| WARNING  | Crear orden | user=3 | POST /v1/orders | 412 ms')
