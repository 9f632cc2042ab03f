# ==============================================================================
# SERVICIO DE CATEGORÍAS
# ==============================================================================
# CRUD de categorías con caché:
#   - "category:<id>"              → una categoría (sin expiración)
#   - "categories:<skip>-<limit>"  → una página
# Toda escritura invalida "categories:*" completo (invalidación amplia).
# ==============================================================================

from typing import Any, Dict, List

from app_pos.cache import ICacheRepository, generate_cache_key, generate_cache_key_params
from app_pos.models import Category, ConflictingDataError, DataNotFoundError
from app_pos.repositories.interfaces import ICategoryRepository
from app_pos.services.base import BaseService, storage_errors


class CategoryService(BaseService):
    """
    Servicio para gestión de categorías.

    Responsabilidades:
    - CRUD de categorías
    - Coherencia de la caché por entidad y por página
    """

    CACHE_PREFIX = 'category'
    COLLECTION_PREFIX = 'categories'
    UPDATABLE_FIELDS = ('name',)

    def __init__(self, category_repo: ICategoryRepository, cache: ICacheRepository):
        """
        Args:
            category_repo: Repositorio de categorías
            cache: Puerto de caché
        """
        super().__init__(cache)
        self.category_repo = category_repo

    def create_category(self, category: Category) -> Category:
        """
        Crea una categoría.

        Raises:
            ConflictingDataError: Si el nombre ya existe
            InternalError: Cualquier otro fallo
        """
        with storage_errors(ConflictingDataError):
            category = self.category_repo.create_category(category)

        self._cache_set(generate_cache_key(self.CACHE_PREFIX, category.id), category)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return category

    def get_category(self, category_id: int) -> Category:
        """
        Obtiene una categoría (cache-first).

        Raises:
            DataNotFoundError: Si no existe
        """
        cache_key = generate_cache_key(self.CACHE_PREFIX, category_id)
        category = self._cache_get(cache_key, Category)
        if category is not None:
            return category

        with storage_errors(DataNotFoundError):
            category = self.category_repo.get_category_by_id(category_id)

        self._cache_set(cache_key, category)
        return category

    def list_categories(self, skip: int, limit: int) -> List[Category]:
        """Lista una página de categorías (cache-first)."""
        params = generate_cache_key_params(skip, limit)
        cache_key = generate_cache_key(self.COLLECTION_PREFIX, params)
        categories = self._cache_get(cache_key, Category, many=True)
        if categories is not None:
            return categories

        with storage_errors():
            categories = self.category_repo.list_categories(skip, limit)

        self._cache_set(cache_key, categories)
        return categories

    def update_category(self, category_id: int, updates: Dict[str, Any]) -> Category:
        """
        Actualiza una categoría.

        Args:
            category_id: ID de la categoría
            updates: Campos a actualizar ({'name': ...})

        Raises:
            DataNotFoundError: Si no existe
            NoUpdatedDataError: Si no hay cambios
            ConflictingDataError: Si el nuevo nombre ya existe
        """
        with storage_errors(DataNotFoundError):
            existing = self.category_repo.get_category_by_id(category_id)

        changes = self._changed_fields(existing, updates, self.UPDATABLE_FIELDS)

        with storage_errors(DataNotFoundError, ConflictingDataError):
            category = self.category_repo.update_category(category_id, changes)

        cache_key = generate_cache_key(self.CACHE_PREFIX, category_id)
        self._cache_delete(cache_key)
        self._cache_set(cache_key, category)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return category

    def delete_category(self, category_id: int) -> None:
        """
        Elimina una categoría. Los productos que la referencian NO se tocan.

        Raises:
            DataNotFoundError: Si no existe
        """
        with storage_errors(DataNotFoundError):
            self.category_repo.get_category_by_id(category_id)

        self._cache_delete(generate_cache_key(self.CACHE_PREFIX, category_id))
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")

        with storage_errors(DataNotFoundError):
            self.category_repo.delete_category(category_id)
