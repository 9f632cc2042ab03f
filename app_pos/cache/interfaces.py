# ==============================================================================
# INTERFAZ DE CACHÉ
# ==============================================================================
# Contrato genérico clave/valor con TTL. Los servicios dependen de este
# protocolo, no de la implementación (memoria hoy, Redis después).
#
# - get() devuelve None en caso de fallo de caché (miss): NO es un error
# - Cualquier excepción lanzada por la implementación es un fallo real
#   y los servicios la reportan como InternalError
# ==============================================================================

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ICacheRepository(Protocol):
    """Puerto de caché usado por los servicios de aplicación."""

    def get(self, key: str) -> Optional[bytes]:
        """Obtiene el valor de una clave o None si no existe/expiró."""
        ...

    def set(self, key: str, value: bytes, ttl: int = 0) -> None:
        """Guarda un valor. ttl en segundos; 0 = sin expiración."""
        ...

    def delete(self, key: str) -> None:
        """Elimina una clave (no falla si no existe)."""
        ...

    def delete_by_prefix(self, pattern: str) -> None:
        """Elimina todas las claves que coinciden con el patrón ("orders:*")."""
        ...
