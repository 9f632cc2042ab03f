# ==============================================================================
# SERVICIO DE USUARIOS
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con usuarios.
#
# - Este servicio NO depende del tipo de almacenamiento (JSON/PostgreSQL)
# - Las contraseñas se guardan SIEMPRE como hash (werkzeug.security)
# - Claves de caché: "user:<id>", "users:<skip>-<limit>", invalidación "users:*"
# ==============================================================================

from typing import Any, Dict, List

from werkzeug.security import check_password_hash, generate_password_hash

from app_pos.cache import ICacheRepository, generate_cache_key, generate_cache_key_params
from app_pos.models import (
    ConflictingDataError,
    DataNotFoundError,
    NoUpdatedDataError,
    User,
    UserRole,
)
from app_pos.performance_logger import profile_function
from app_pos.repositories.interfaces import IUserRepository
from app_pos.services.base import BaseService, storage_errors


class UserService(BaseService):
    """
    Servicio para gestión de usuarios.

    Responsabilidades:
    - Registro (hash de contraseña, rol por defecto "cashier")
    - CRUD de usuarios con caché
    - Alta del administrador inicial
    """

    CACHE_PREFIX = 'user'
    COLLECTION_PREFIX = 'users'
    UPDATABLE_FIELDS = ('name', 'email', 'role')

    def __init__(self, user_repo: IUserRepository, cache: ICacheRepository):
        """
        Args:
            user_repo: Repositorio de usuarios (JSON ahora, PostgreSQL después)
            cache: Puerto de caché
        """
        super().__init__(cache)
        self.user_repo = user_repo

    # =========================================================================
    # REGISTRO
    # =========================================================================

    @profile_function(name='Registrar usuario')
    def register(self, user: User) -> User:
        """
        Registra un nuevo usuario.

        Args:
            user: Datos del usuario; user.password llega en texto plano

        Returns:
            Usuario creado (con hash de contraseña)

        Raises:
            ConflictingDataError: Si el email ya está registrado
        """
        user.password = generate_password_hash(user.password)
        user.role = UserRole(user.role or UserRole.CASHIER)

        with storage_errors(ConflictingDataError):
            user = self.user_repo.create_user(user)

        self._cache_set(generate_cache_key(self.CACHE_PREFIX, user.id), user)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return user

    def ensure_admin(self, name: str, email: str, password: str) -> User:
        """
        Garantiza que exista un administrador con ese email.
        Si ya existe (con cualquier rol) se devuelve tal cual.
        """
        try:
            with storage_errors(DataNotFoundError):
                return self.user_repo.get_user_by_email(email)
        except DataNotFoundError:
            return self.register(User(name=name, email=email, password=password, role=UserRole.ADMIN))

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_user(self, user_id: int) -> User:
        cache_key = generate_cache_key(self.CACHE_PREFIX, user_id)
        user = self._cache_get(cache_key, User)
        if user is not None:
            return user

        with storage_errors(DataNotFoundError):
            user = self.user_repo.get_user_by_id(user_id)

        self._cache_set(cache_key, user)
        return user

    def list_users(self, skip: int, limit: int) -> List[User]:
        params = generate_cache_key_params(skip, limit)
        cache_key = generate_cache_key(self.COLLECTION_PREFIX, params)
        users = self._cache_get(cache_key, User, many=True)
        if users is not None:
            return users

        with storage_errors():
            users = self.user_repo.list_users(skip, limit)

        self._cache_set(cache_key, users)
        return users

    # =========================================================================
    # MODIFICACIONES
    # =========================================================================

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> User:
        """
        Actualiza un usuario.

        Args:
            updates: name, email, role y/o password (texto plano)

        Raises:
            DataNotFoundError: Si no existe
            NoUpdatedDataError: Si no hay cambios reales
            ConflictingDataError: Si el email ya está en uso
        """
        with storage_errors(DataNotFoundError):
            existing = self.user_repo.get_user_by_id(user_id)

        updates = dict(updates or {})
        password = updates.pop('password', None)
        if updates.get('role'):
            updates['role'] = UserRole(updates['role'])
        new_password = bool(password) and not check_password_hash(existing.password, password)

        try:
            changes = self._changed_fields(existing, updates, self.UPDATABLE_FIELDS)
        except NoUpdatedDataError:
            if not new_password:
                raise
            changes = {}
        if new_password:
            changes['password'] = generate_password_hash(password)

        with storage_errors(DataNotFoundError, ConflictingDataError):
            user = self.user_repo.update_user(user_id, changes)

        cache_key = generate_cache_key(self.CACHE_PREFIX, user_id)
        self._cache_delete(cache_key)
        self._cache_set(cache_key, user)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return user

    def delete_user(self, user_id: int) -> None:
        """
        Elimina un usuario. Las órdenes que lo referencian NO se tocan.

        Raises:
            DataNotFoundError: Si no existe
        """
        with storage_errors(DataNotFoundError):
            self.user_repo.get_user_by_id(user_id)

        self._cache_delete(generate_cache_key(self.CACHE_PREFIX, user_id))
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")

        with storage_errors(DataNotFoundError):
            self.user_repo.delete_user(user_id)
