# ==============================================================================
# UNIDAD DE TRABAJO (TRANSACCIÓN)
# ==============================================================================
# Agrupa varias operaciones de repositorio en una unidad atómica:
#   1. Toma el lock global de almacenamiento (nadie más lee/escribe)
#   2. Guarda una copia de cada archivo participante
#   3. Si el bloque lanza una excepción, restaura las copias
#
# Con PostgreSQL esto sería BEGIN / COMMIT / ROLLBACK.
# ==============================================================================

from contextlib import contextmanager
from typing import Iterator

from app_pos.repositories.base import BaseRepository


class JsonUnitOfWork:
    """
    Unidad de trabajo sobre repositorios JSON.

    Uso:
        uow = JsonUnitOfWork(product_repo, order_repo)
        with uow.transaction():
            order_repo.create_order(order)
            product_repo.update_product(pid, {'stock': 2})
    """

    def __init__(self, *repositories: BaseRepository):
        self._repositories = repositories

    @contextmanager
    def transaction(self) -> Iterator['JsonUnitOfWork']:
        with BaseRepository._file_lock:
            snapshots = [(repo, repo.snapshot()) for repo in self._repositories]
            try:
                yield self
            except BaseException:
                for repo, data in snapshots:
                    repo.restore(data)
                raise
