# ==============================================================================
# REPOSITORIO DE PRODUCTOS
# ==============================================================================
# Encapsula todo el acceso a products.json
# El precio se guarda como string (Decimal) y el SKU se genera al crear.
# La categoría adjunta (enriquecimiento) NUNCA se persiste.
# ==============================================================================

import os
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

from app_pos.models import Product
from app_pos.repositories.base import DictRepository


class ProductRepository(DictRepository):
    """
    Repositorio para gestión de productos.

    Formato de un registro en products.json:
        {"id": 1, "category_id": 2, "sku": "8f0c...", "name": "Café",
         "stock": 5, "price": "10.00", "image": "cafe.png", ...}
    """

    entity_name = 'producto'
    unique_fields = ('sku',)

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'products.json'))

    @staticmethod
    def _to_record(values: Dict[str, Any]) -> Dict[str, Any]:
        """Quita campos derivados y normaliza el precio a string."""
        record = {k: v for k, v in values.items() if k != 'category'}
        if isinstance(record.get('price'), Decimal):
            record['price'] = str(record['price'])
        return record

    def create_product(self, product: Product) -> Product:
        record = self._to_record(product.to_dict())
        for key in ('id', 'created_at', 'updated_at'):
            record.pop(key, None)
        record['sku'] = record.get('sku') or str(uuid.uuid4())
        return Product.from_dict(self.insert(record))

    def get_product_by_id(self, product_id: int) -> Product:
        return Product.from_dict(self.get_record(product_id))

    def list_products(
        self,
        search: str,
        category_id: Optional[int],
        skip: int,
        limit: int
    ) -> List[Product]:
        """
        Lista productos filtrando por nombre (sin distinguir mayúsculas)
        y/o categoría.
        """
        term = (search or '').strip().lower()

        def _matches(record: Dict[str, Any]) -> bool:
            if term and term not in record.get('name', '').lower():
                return False
            if category_id and record.get('category_id') != category_id:
                return False
            return True

        return [Product.from_dict(r) for r in self.list_records(skip, limit, _matches)]

    def update_product(self, product_id: int, updates: Dict[str, Any]) -> Product:
        return Product.from_dict(self.update_record(product_id, self._to_record(updates)))

    def delete_product(self, product_id: int) -> None:
        self.delete_record(product_id)
