# ==============================================================================
# SERVICIO DE AUTENTICACIÓN
# ==============================================================================
# Login por email + contraseña → token de acceso.
# Nunca revela si falló el email o la contraseña.
# ==============================================================================

from werkzeug.security import check_password_hash

from app_pos.models import DataNotFoundError, InvalidCredentialsError
from app_pos.performance_logger import profile_function
from app_pos.repositories.interfaces import IUserRepository
from app_pos.services.base import storage_errors
from app_pos.services.token_service import TokenService


class AuthService:
    """Servicio de autenticación de usuarios."""

    def __init__(self, user_repo: IUserRepository, token_service: TokenService):
        self.user_repo = user_repo
        self.token_service = token_service

    @profile_function(name='Iniciar sesión')
    def login(self, email: str, password: str) -> str:
        """
        Autentica un usuario.

        Returns:
            Token de acceso firmado

        Raises:
            InvalidCredentialsError: Si el email no existe o la contraseña no coincide
        """
        try:
            with storage_errors(DataNotFoundError):
                user = self.user_repo.get_user_by_email(email)
        except DataNotFoundError as exc:
            raise InvalidCredentialsError() from exc

        if not check_password_hash(user.password, password or ''):
            raise InvalidCredentialsError()

        return self.token_service.create_token(user)
