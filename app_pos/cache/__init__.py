# ==============================================================================
# CAPA DE CACHÉ
# ==============================================================================
# ├── interfaces.py   → ICacheRepository (contrato get/set/delete/delete_by_prefix)
# ├── memory_cache.py → Implementación en memoria con TTL
# └── codec.py        → Esquema de claves y serialización JSON de entidades
#
# La caché NUNCA es autoritativa: el almacenamiento es la fuente de verdad.
# ==============================================================================

from .interfaces import ICacheRepository
from .memory_cache import MemoryCache
from .codec import (
    generate_cache_key,
    generate_cache_key_params,
    serialize,
    deserialize,
)

__all__ = [
    'ICacheRepository',
    'MemoryCache',
    'generate_cache_key',
    'generate_cache_key_params',
    'serialize',
    'deserialize',
]
