# ==============================================================================
# SERVICIO BASE - Caché y traducción de errores
# ==============================================================================
# Comportamiento común de todos los servicios:
#   - Lectura cache-first: un miss NO es error, se cae al repositorio
#   - Cualquier fallo de caché o de serialización → InternalError
#   - Los errores del almacenamiento que no se dejan pasar explícitamente
#     (NotFound / Conflict) se colapsan en InternalError
# ==============================================================================

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional, Type

from app_pos.cache import ICacheRepository, deserialize, serialize
from app_pos.models import DomainError, InternalError, NoUpdatedDataError


@contextmanager
def storage_errors(*passthrough: Type[DomainError]) -> Iterator[None]:
    """
    Traduce excepciones de repositorio/caché al vocabulario del dominio.

    Args:
        passthrough: Errores del dominio que se propagan tal cual

    Uso:
        with storage_errors(DataNotFoundError):
            product = self.product_repo.get_product_by_id(pid)
    """
    try:
        yield
    except DomainError as exc:
        if passthrough and isinstance(exc, passthrough):
            raise
        raise InternalError() from exc
    except Exception as exc:
        raise InternalError() from exc


class BaseService:
    """Clase base con las operaciones de caché compartidas."""

    def __init__(self, cache: ICacheRepository):
        self.cache = cache

    @staticmethod
    def _changed_fields(
        existing: Any,
        updates: Dict[str, Any],
        allowed_fields: Iterable[str]
    ) -> Dict[str, Any]:
        """
        Filtra una actualización parcial.

        Los valores None o "" cuentan como "no enviado".

        Returns:
            Campos permitidos que se enviaron

        Raises:
            NoUpdatedDataError: Si no se envió nada o todo es idéntico
        """
        provided = {
            k: v for k, v in (updates or {}).items()
            if k in allowed_fields and v is not None and v != ''
        }
        if not provided:
            raise NoUpdatedDataError()
        if all(getattr(existing, k) == v for k, v in provided.items()):
            raise NoUpdatedDataError()
        return provided

    def _cache_get(self, key: str, entity_cls: Type, many: bool = False) -> Optional[Any]:
        """
        Busca una clave en la caché.

        Returns:
            Entidad (o lista) deserializada, o None si es un miss

        Raises:
            InternalError: Si la caché falla o el valor no se puede leer
        """
        with storage_errors():
            data = self.cache.get(key)
        if data is None:
            return None
        with storage_errors():
            return deserialize(data, entity_cls, many=many)

    def _cache_set(self, key: str, value: Any, ttl: int = 0) -> None:
        with storage_errors():
            self.cache.set(key, serialize(value), ttl)

    def _cache_delete(self, key: str) -> None:
        with storage_errors():
            self.cache.delete(key)

    def _cache_invalidate(self, pattern: str) -> None:
        """Invalida todas las páginas cacheadas de una colección."""
        with storage_errors():
            self.cache.delete_by_prefix(pattern)
