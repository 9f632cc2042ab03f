# ==============================================================================
# CACHÉ EN MEMORIA CON TTL
# ==============================================================================
# Implementación en proceso del puerto de caché.
# - Lecturas instantáneas desde memoria
# - Thread-safe con un RLock global
# - Expiración perezosa: las claves vencidas se descartan al leerlas
# ==============================================================================

import fnmatch
import threading
import time
from typing import Dict, Optional, Tuple


class MemoryCache:
    """
    Caché clave/valor con TTL por entrada.

    Uso:
        cache = MemoryCache()
        cache.set('order:1', b'{...}')          # sin expiración
        cache.set('orders:1-10', b'[...]', 60)  # expira en 60 s
        cache.delete_by_prefix('orders:*')
    """

    def __init__(self, clock=time.monotonic):
        """
        Inicializa la caché.

        Args:
            clock: Función que retorna segundos monotónicos (inyectable en tests)
        """
        self._data: Dict[str, Tuple[bytes, Optional[float]]] = {}
        self._lock = threading.RLock()
        self._clock = clock

    def get(self, key: str) -> Optional[bytes]:
        """
        Obtiene un valor de la caché.

        Returns:
            Bytes almacenados o None si no existe o expiró
        """
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._data[key]
                return None
            return value

    def set(self, key: str, value: bytes, ttl: int = 0) -> None:
        """
        Guarda un valor.

        Args:
            key: Clave
            value: Bytes serializados
            ttl: Segundos de vida; 0 = sin expiración
        """
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"El valor para '{key}' debe ser bytes")
        if ttl < 0:
            raise ValueError('ttl no puede ser negativo')
        expires_at = self._clock() + ttl if ttl > 0 else None
        with self._lock:
            self._data[key] = (bytes(value), expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def delete_by_prefix(self, pattern: str) -> None:
        """
        Elimina todas las claves que coinciden con un patrón glob.
        Un prefijo sin comodín ("orders:") se trata como "orders:*".
        """
        if not any(ch in pattern for ch in '*?['):
            pattern = pattern + '*'
        with self._lock:
            for key in [k for k in self._data if fnmatch.fnmatchcase(k, pattern)]:
                del self._data[key]

    def keys(self):
        """Claves vigentes (útil para diagnóstico y tests)."""
        with self._lock:
            now = self._clock()
            return sorted(
                k for k, (_, exp) in self._data.items()
                if exp is None or now < exp
            )

    def close(self) -> None:
        """Vacía la caché (llamar al apagar la aplicación)."""
        with self._lock:
            self._data.clear()
