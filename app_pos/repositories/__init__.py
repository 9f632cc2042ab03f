# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia (actualmente JSON).
# Cuando se migre a PostgreSQL, solo hay que modificar esta capa.
#
# ESTRUCTURA:
# ├── interfaces.py            → Protocolos (contratos por entidad + unidad de trabajo)
# ├── base.py                  → BaseRepository / DictRepository (JSON atómico)
# ├── user_repository.py       → users.json
# ├── category_repository.py   → categories.json
# ├── product_repository.py    → products.json
# ├── payment_repository.py    → payments.json
# ├── order_repository.py      → orders.json
# └── unit_of_work.py          → Transacción sobre varios archivos
# ==============================================================================

from .interfaces import (
    IUserRepository,
    ICategoryRepository,
    IProductRepository,
    IPaymentRepository,
    IOrderRepository,
    IUnitOfWork,
)

from .base import BaseRepository, DictRepository
from .user_repository import UserRepository
from .category_repository import CategoryRepository
from .product_repository import ProductRepository
from .payment_repository import PaymentRepository
from .order_repository import OrderRepository
from .unit_of_work import JsonUnitOfWork

__all__ = [
    # Interfaces
    'IUserRepository',
    'ICategoryRepository',
    'IProductRepository',
    'IPaymentRepository',
    'IOrderRepository',
    'IUnitOfWork',

    # Clases base
    'BaseRepository',
    'DictRepository',

    # Implementaciones JSON
    'UserRepository',
    'CategoryRepository',
    'ProductRepository',
    'PaymentRepository',
    'OrderRepository',
    'JsonUnitOfWork',
]
