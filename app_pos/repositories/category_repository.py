# ==============================================================================
# REPOSITORIO DE CATEGORÍAS
# ==============================================================================
# Encapsula todo el acceso a categories.json (nombre único).
# Eliminar una categoría NO toca los productos que la referencian.
# ==============================================================================

import os
from typing import Any, Dict, List

from app_pos.models import Category
from app_pos.repositories.base import DictRepository


class CategoryRepository(DictRepository):
    """Repositorio para gestión de categorías."""

    entity_name = 'categoría'
    unique_fields = ('name',)

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'categories.json'))

    def create_category(self, category: Category) -> Category:
        return Category.from_dict(self.insert({'name': category.name}))

    def get_category_by_id(self, category_id: int) -> Category:
        return Category.from_dict(self.get_record(category_id))

    def list_categories(self, skip: int, limit: int) -> List[Category]:
        return [Category.from_dict(r) for r in self.list_records(skip, limit)]

    def update_category(self, category_id: int, updates: Dict[str, Any]) -> Category:
        return Category.from_dict(self.update_record(category_id, updates))

    def delete_category(self, category_id: int) -> None:
        self.delete_record(category_id)
