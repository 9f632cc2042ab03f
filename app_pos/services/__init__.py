# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Los servicios dependen de interfaces (repositorios y caché), nunca de
# implementaciones concretas. Se construyen en app_container.py.
#
# ESTRUCTURA:
# ├── base.py              → BaseService (caché) + storage_errors()
# ├── category_service.py  → CRUD de categorías
# ├── product_service.py   → CRUD de productos (con categoría adjunta)
# ├── payment_service.py   → CRUD de métodos de pago
# ├── user_service.py      → Registro y CRUD de usuarios
# ├── token_service.py     → Tokens de acceso firmados
# ├── auth_service.py      → Login
# └── order_service.py     → Crear / consultar órdenes
# ==============================================================================

from .base import BaseService, storage_errors
from .category_service import CategoryService
from .product_service import ProductService
from .payment_service import PaymentService
from .user_service import UserService
from .token_service import TokenPayload, TokenService
from .auth_service import AuthService
from .order_service import OrderService

__all__ = [
    'BaseService',
    'storage_errors',
    'CategoryService',
    'ProductService',
    'PaymentService',
    'UserService',
    'TokenPayload',
    'TokenService',
    'AuthService',
    'OrderService',
]
