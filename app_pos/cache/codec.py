# ==============================================================================
# CODEC DE CACHÉ Y ESQUEMA DE CLAVES
# ==============================================================================
# Claves:
#   "<entidad>:<id>"                  → una entidad ("order:7")
#   "<colección>:<skip>-<limit>[...]" → una página ("orders:1-10")
#   "<colección>:*"                   → patrón de invalidación
#
# Valores: JSON UTF-8 generado desde to_dict(); se reconstruyen con from_dict().
# ==============================================================================

import json
from typing import Any, List, Type, TypeVar, Union

T = TypeVar('T')


def generate_cache_key(prefix: str, value: Any) -> str:
    """Genera una clave "<prefix>:<value>"."""
    return f"{prefix}:{value}"


def generate_cache_key_params(*params: Any) -> str:
    """
    Codifica parámetros de paginación/filtros de forma determinista.

    Ejemplo:
        generate_cache_key_params(1, 10) -> "1-10"
    """
    return '-'.join('' if p is None else str(p) for p in params)


def serialize(value: Any) -> bytes:
    """
    Serializa una entidad (o lista de entidades) con to_dict().

    Raises:
        TypeError: si el valor no es serializable
    """
    if isinstance(value, (list, tuple)):
        payload = [item.to_dict() for item in value]
    else:
        payload = value.to_dict()
    return json.dumps(payload, ensure_ascii=False).encode('utf-8')


def deserialize(data: bytes, entity_cls: Type[T], many: bool = False) -> Union[T, List[T]]:
    """
    Reconstruye entidades desde bytes.

    Args:
        data: Bytes leídos de la caché
        entity_cls: Clase de entidad con from_dict()
        many: True si el valor es una lista

    Raises:
        ValueError/TypeError/KeyError: si los bytes no representan la entidad
    """
    payload = json.loads(data.decode('utf-8'))
    if many:
        if not isinstance(payload, list):
            raise ValueError('Se esperaba una lista en la caché')
        return [entity_cls.from_dict(item) for item in payload]
    if not isinstance(payload, dict):
        raise ValueError('Se esperaba un objeto en la caché')
    return entity_cls.from_dict(payload)
