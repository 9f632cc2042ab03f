from unittest.mock import patch

import pytest
from werkzeug.security import check_password_hash

from app_pos.models import ConflictingDataError, DataNotFoundError, NoUpdatedDataError, User, UserRole


@pytest.fixture
def service(container):
    return container.user_service


def test_register_hashes_password_and_defaults_role(cashier):
    assert cashier.password != 'secreto-1'
    assert check_password_hash(cashier.password, 'secreto-1')
    assert cashier.role is UserRole.CASHIER


def test_register_duplicate_email(service, cashier):
    with pytest.raises(ConflictingDataError):
        service.register(User(name='Otra', email=cashier.email, password='x'))


def test_ensure_admin_is_idempotent(service):
    first = service.ensure_admin('Admin', 'admin@pos.test', 'clave')
    second = service.ensure_admin('Admin', 'admin@pos.test', 'otra-clave')
    assert first.id == second.id
    assert first.is_admin()


def test_update_same_password_is_no_update(service, container, cashier):
    repo = container.user_repo

    with patch.object(repo, 'update_user', wraps=repo.update_user) as spy:
        with pytest.raises(NoUpdatedDataError):
            service.update_user(cashier.id, {'password': 'secreto-1'})
        with pytest.raises(NoUpdatedDataError):
            service.update_user(cashier.id, {'name': 'Ana'})

    assert spy.call_count == 0


def test_update_password_only(service, cashier):
    updated = service.update_user(cashier.id, {'password': 'nuevo-2'})
    assert check_password_hash(updated.password, 'nuevo-2')
    assert updated.name == 'Ana'


def test_update_role(service, cashier):
    updated = service.update_user(cashier.id, {'role': 'admin'})
    assert updated.is_admin()
    assert service.get_user(cashier.id).is_admin()


def test_list_and_delete(service, cashier):
    assert [u.id for u in service.list_users(1, 10)] == [cashier.id]
    service.delete_user(cashier.id)
    assert service.list_users(1, 10) == []
    with pytest.raises(DataNotFoundError):
        service.get_user(cashier.id)
