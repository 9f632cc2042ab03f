# ==============================================================================
# SERVICIO DE PRODUCTOS
# ==============================================================================
# CRUD de productos. Cada lectura adjunta la categoría del producto
# (enriquecimiento en tiempo de consulta, sin FK en cascada).
#
# Claves de caché:
#   "product:<id>"
#   "products:<skip>-<limit>-<category_id>-<search>"
# Toda escritura invalida "products:*".
# ==============================================================================

from typing import Any, Dict, List, Optional

from app_pos.cache import ICacheRepository, generate_cache_key, generate_cache_key_params
from app_pos.models import ConflictingDataError, DataNotFoundError, Product, to_decimal
from app_pos.repositories.interfaces import ICategoryRepository, IProductRepository
from app_pos.services.base import BaseService, storage_errors


class ProductService(BaseService):
    """
    Servicio para gestión de productos.

    Responsabilidades:
    - CRUD de productos
    - Validar que la categoría exista al crear/cambiar de categoría
    - Adjuntar la categoría en cada lectura
    """

    CACHE_PREFIX = 'product'
    COLLECTION_PREFIX = 'products'
    UPDATABLE_FIELDS = ('name', 'image', 'price', 'stock', 'category_id')

    def __init__(
        self,
        product_repo: IProductRepository,
        category_repo: ICategoryRepository,
        cache: ICacheRepository
    ):
        super().__init__(cache)
        self.product_repo = product_repo
        self.category_repo = category_repo

    def _attach_category(self, product: Product) -> Product:
        with storage_errors(DataNotFoundError):
            product.category = self.category_repo.get_category_by_id(product.category_id)
        return product

    def create_product(self, product: Product) -> Product:
        """
        Crea un producto.

        Raises:
            DataNotFoundError: Si la categoría no existe
            ConflictingDataError: Si el producto choca con uno existente
        """
        with storage_errors(DataNotFoundError):
            category = self.category_repo.get_category_by_id(product.category_id)

        with storage_errors(ConflictingDataError):
            product = self.product_repo.create_product(product)
        product.category = category

        self._cache_set(generate_cache_key(self.CACHE_PREFIX, product.id), product)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return product

    def get_product(self, product_id: int) -> Product:
        """Obtiene un producto con su categoría (cache-first)."""
        cache_key = generate_cache_key(self.CACHE_PREFIX, product_id)
        product = self._cache_get(cache_key, Product)
        if product is not None:
            return product

        with storage_errors(DataNotFoundError):
            product = self.product_repo.get_product_by_id(product_id)
        self._attach_category(product)

        self._cache_set(cache_key, product)
        return product

    def list_products(
        self,
        search: str,
        category_id: Optional[int],
        skip: int,
        limit: int
    ) -> List[Product]:
        """
        Lista productos filtrados por nombre y/o categoría.

        Args:
            search: Texto a buscar en el nombre ('' = todos)
            category_id: Filtrar por categoría (None = todas)
            skip: Número de página (desde 1)
            limit: Tamaño de página
        """
        params = generate_cache_key_params(skip, limit, category_id or 0, search or '')
        cache_key = generate_cache_key(self.COLLECTION_PREFIX, params)
        products = self._cache_get(cache_key, Product, many=True)
        if products is not None:
            return products

        with storage_errors():
            products = self.product_repo.list_products(search, category_id, skip, limit)
        for product in products:
            self._attach_category(product)

        self._cache_set(cache_key, products)
        return products

    def update_product(self, product_id: int, updates: Dict[str, Any]) -> Product:
        """
        Actualiza un producto.

        Args:
            updates: Campos a actualizar (name, image, price, stock, category_id)

        Raises:
            DataNotFoundError: Si el producto o la nueva categoría no existen
            NoUpdatedDataError: Si no hay cambios
            ConflictingDataError: Si choca con otro producto
        """
        with storage_errors(DataNotFoundError):
            existing = self.product_repo.get_product_by_id(product_id)

        updates = dict(updates or {})
        if updates.get('price') is not None:
            updates['price'] = to_decimal(updates['price'])
        if updates.get('stock') is not None:
            updates['stock'] = int(updates['stock'])
        changes = self._changed_fields(existing, updates, self.UPDATABLE_FIELDS)

        if 'category_id' in changes:
            with storage_errors(DataNotFoundError):
                self.category_repo.get_category_by_id(changes['category_id'])

        with storage_errors(DataNotFoundError, ConflictingDataError):
            product = self.product_repo.update_product(product_id, changes)
        self._attach_category(product)

        cache_key = generate_cache_key(self.CACHE_PREFIX, product_id)
        self._cache_delete(cache_key)
        self._cache_set(cache_key, product)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return product

    def delete_product(self, product_id: int) -> None:
        with storage_errors(DataNotFoundError):
            self.product_repo.get_product_by_id(product_id)

        self._cache_delete(generate_cache_key(self.CACHE_PREFIX, product_id))
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")

        with storage_errors(DataNotFoundError):
            self.product_repo.delete_product(product_id)
