from unittest.mock import patch

import pytest
from itsdangerous import URLSafeTimedSerializer

from app_pos.models import ExpiredTokenError, InvalidCredentialsError, InvalidTokenError, UserRole
from app_pos.services import TokenService


def test_login_returns_verifiable_token(container, cashier):
    token = container.auth_service.login('ana@pos.test', 'secreto-1')
    payload = container.token_service.verify_token(token)
    assert payload.user_id == cashier.id
    assert payload.role is UserRole.CASHIER
    assert not payload.is_admin()


def test_login_wrong_password(container, cashier):
    with pytest.raises(InvalidCredentialsError):
        container.auth_service.login('ana@pos.test', 'otra')


def test_login_unknown_email(container):
    with pytest.raises(InvalidCredentialsError):
        container.auth_service.login('nadie@pos.test', 'x')


def test_token_signed_with_other_key_is_invalid(container, cashier):
    token = TokenService('otra-clave').create_token(cashier)
    with pytest.raises(InvalidTokenError):
        container.token_service.verify_token(token)


def test_garbage_token_is_invalid(container):
    with pytest.raises(InvalidTokenError):
        container.token_service.verify_token('no-es-un-token')


def test_token_without_user_id_is_invalid():
    service = TokenService('clave')
    token = URLSafeTimedSerializer('clave', salt=TokenService.SALT).dumps({'role': 'admin'})
    with pytest.raises(InvalidTokenError):
        service.verify_token(token)


def test_expired_token(cashier):
    service = TokenService('clave', duration=60)
    with patch('itsdangerous.timed.time.time', return_value=1_000_000):
        token = service.create_token(cashier)
    with patch('itsdangerous.timed.time.time', return_value=1_000_000 + 3600):
        with pytest.raises(ExpiredTokenError):
            service.verify_token(token)
