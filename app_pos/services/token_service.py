# ==============================================================================
# SERVICIO DE TOKENS DE ACCESO
# ==============================================================================
# Tokens firmados y con vencimiento (itsdangerous), enviados por el cliente
# en la cabecera "Authorization: Bearer <token>".
# El payload solo lleva el id y el rol del usuario.
# ==============================================================================

from dataclasses import dataclass

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from app_pos.models import ExpiredTokenError, InvalidTokenError, User, UserRole


@dataclass(frozen=True)
class TokenPayload:
    """Datos extraídos de un token válido."""
    user_id: int
    role: UserRole

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class TokenService:
    """Crea y verifica tokens de acceso."""

    SALT = 'app-pos-access-token'

    def __init__(self, secret_key: str, duration: int = 3600):
        """
        Args:
            secret_key: Clave de firma
            duration: Vigencia del token en segundos
        """
        self.duration = duration
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self.SALT)

    def create_token(self, user: User) -> str:
        role = user.role.value if isinstance(user.role, UserRole) else user.role
        return self._serializer.dumps({'user_id': user.id, 'role': role})

    def verify_token(self, token: str) -> TokenPayload:
        """
        Valida firma y vencimiento.

        Raises:
            ExpiredTokenError: Si el token venció
            InvalidTokenError: Si la firma o el contenido no son válidos
        """
        try:
            data = self._serializer.loads(token, max_age=self.duration)
        except SignatureExpired as exc:
            raise ExpiredTokenError() from exc
        except BadSignature as exc:
            raise InvalidTokenError() from exc

        try:
            return TokenPayload(user_id=int(data['user_id']), role=UserRole(data['role']))
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc
