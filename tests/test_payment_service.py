from unittest.mock import patch

import pytest

from app_pos.models import (
    ConflictingDataError,
    DataNotFoundError,
    NoUpdatedDataError,
    Payment,
    PaymentType,
)


@pytest.fixture
def service(container):
    return container.payment_service


def test_create_and_get(service, payment):
    assert service.get_payment(payment.id) == payment
    with pytest.raises(ConflictingDataError):
        service.create_payment(Payment(name='Efectivo', type=PaymentType.EDC))


def test_update_type_from_string(service, payment):
    updated = service.update_payment(payment.id, {'type': 'E-WALLET', 'logo': 'wallet.png'})
    assert updated.type is PaymentType.E_WALLET
    assert service.get_payment(payment.id).logo == 'wallet.png'


def test_update_without_changes(service, container, payment):
    repo = container.payment_repo

    with patch.object(repo, 'update_payment', wraps=repo.update_payment) as spy:
        with pytest.raises(NoUpdatedDataError):
            service.update_payment(payment.id, {'type': 'CASH'})
        with pytest.raises(NoUpdatedDataError):
            service.update_payment(payment.id, {})

    assert spy.call_count == 0


def test_list_and_delete(service, payment, cache):
    assert service.list_payments(1, 10) == [payment]
    service.delete_payment(payment.id)
    assert service.list_payments(1, 10) == []
    with pytest.raises(DataNotFoundError):
        service.get_payment(payment.id)
