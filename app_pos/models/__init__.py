# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Entidades del dominio (dataclasses) y vocabulario de errores.
# Independientes del mecanismo de persistencia y de la caché.
# ==============================================================================

from .entities import (
    # Usuarios
    User,
    UserRole,

    # Catálogo
    Category,
    Product,

    # Pagos
    Payment,
    PaymentType,

    # Órdenes
    Order,
    OrderProduct,

    # Utilidades
    to_decimal,
    utcnow,
)
from .errors import (
    DomainError,
    DataNotFoundError,
    ConflictingDataError,
    InsufficientStockError,
    InsufficientPaymentError,
    NoUpdatedDataError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    ExpiredTokenError,
    UnauthorizedError,
    ForbiddenError,
    ValidationError,
)

__all__ = [
    'User',
    'UserRole',
    'Category',
    'Product',
    'Payment',
    'PaymentType',
    'Order',
    'OrderProduct',
    'to_decimal',
    'utcnow',

    # Errores
    'DomainError',
    'DataNotFoundError',
    'ConflictingDataError',
    'InsufficientStockError',
    'InsufficientPaymentError',
    'NoUpdatedDataError',
    'InternalError',
    'InvalidCredentialsError',
    'InvalidTokenError',
    'ExpiredTokenError',
    'UnauthorizedError',
    'ForbiddenError',
    'ValidationError',
]
