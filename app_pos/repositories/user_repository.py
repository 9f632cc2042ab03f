# ==============================================================================
# REPOSITORIO DE USUARIOS
# ==============================================================================
# Encapsula todo el acceso a users.json
# El email es único; la contraseña se guarda SIEMPRE como hash.
# ==============================================================================

import os
from typing import Any, Dict, List

from app_pos.models import DataNotFoundError, User
from app_pos.repositories.base import DictRepository


class UserRepository(DictRepository):
    """
    Repositorio para gestión de usuarios.

    Formato de un registro en users.json:
        {"id": 1, "name": "Ana", "email": "ana@pos.com",
         "password": "scrypt:...", "role": "cashier", ...}
    """

    entity_name = 'usuario'
    unique_fields = ('email',)

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Carpeta de datos
        """
        super().__init__(os.path.join(base_path, 'users.json'))

    def create_user(self, user: User) -> User:
        record = user.to_dict()
        for key in ('id', 'created_at', 'updated_at'):
            record.pop(key, None)
        return User.from_dict(self.insert(record))

    def get_user_by_id(self, user_id: int) -> User:
        return User.from_dict(self.get_record(user_id))

    def get_user_by_email(self, email: str) -> User:
        """
        Busca un usuario por email.

        Raises:
            DataNotFoundError: Si no existe
        """
        record = self.find_by('email', email)
        if record is None:
            raise DataNotFoundError(f"Usuario con email '{email}' no encontrado")
        return User.from_dict(record)

    def list_users(self, skip: int, limit: int) -> List[User]:
        return [User.from_dict(r) for r in self.list_records(skip, limit)]

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> User:
        changes = dict(updates)
        if changes.get('role') is not None:
            changes['role'] = getattr(changes['role'], 'value', changes['role'])
        return User.from_dict(self.update_record(user_id, changes))

    def delete_user(self, user_id: int) -> None:
        self.delete_record(user_id)
