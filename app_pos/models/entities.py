# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del punto de venta.
# Diseñadas para ser independientes del mecanismo de persistencia:
# los repositorios (JSON) y la caché usan to_dict()/from_dict().
#
# DINERO: siempre Decimal, serializado como string para no perder precisión.
# ==============================================================================

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


# ==============================================================================
# ENUMERACIONES - Roles y tipos válidos
# ==============================================================================

class UserRole(str, Enum):
    """Roles de usuario disponibles en el sistema."""
    ADMIN = "admin"
    CASHIER = "cashier"  # Rol regular (caja)


class PaymentType(str, Enum):
    """Tipos de método de pago aceptados."""
    CASH = "CASH"
    E_WALLET = "E-WALLET"
    EDC = "EDC"


# ==============================================================================
# UTILIDADES DE CONVERSIÓN
# ==============================================================================

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_decimal(value: Any) -> Decimal:
    """Convierte un número (int, str, float) a Decimal sin ruido binario."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value if value is not None else 0)


def _format_dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_dt(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _format_money(value: Optional[Decimal]) -> Optional[str]:
    return str(value) if value is not None else None


# ==============================================================================
# ENTIDADES DE USUARIO
# ==============================================================================

@dataclass
class User:
    """
    Representa un usuario del sistema.

    Attributes:
        id: Identificador único
        name: Nombre visible
        email: Email (único), usado para iniciar sesión
        password: Hash de la contraseña (nunca texto plano)
        role: Rol que define sus permisos
    """
    name: str = ''
    email: str = ''
    password: str = ''
    role: UserRole = UserRole.CASHIER
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        """Verifica si el usuario tiene permisos de administrador."""
        return self.role == UserRole.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia y caché."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'password': self.password,
            'role': self.role.value if isinstance(self.role, Enum) else self.role,
            'created_at': _format_dt(self.created_at),
            'updated_at': _format_dt(self.updated_at),
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Igual que to_dict() pero sin el hash de contraseña (respuestas HTTP)."""
        data = self.to_dict()
        data.pop('password', None)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Crea instancia desde diccionario."""
        return cls(
            id=data.get('id'),
            name=data.get('name', ''),
            email=data.get('email', ''),
            password=data.get('password', ''),
            role=UserRole(data.get('role', UserRole.CASHIER.value)),
            created_at=_parse_dt(data.get('created_at')),
            updated_at=_parse_dt(data.get('updated_at')),
        )


# ==============================================================================
# ENTIDADES DE CATÁLOGO
# ==============================================================================

@dataclass
class Category:
    """Categoría de productos. El nombre es único y no vacío."""
    name: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'created_at': _format_dt(self.created_at),
            'updated_at': _format_dt(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        return cls(
            id=data.get('id'),
            name=data.get('name', ''),
            created_at=_parse_dt(data.get('created_at')),
            updated_at=_parse_dt(data.get('updated_at')),
        )


@dataclass
class Product:
    """
    Producto del catálogo.

    Attributes:
        id: Identificador único
        category_id: Referencia a la categoría
        sku: Código único generado al crear
        name: Nombre del producto
        stock: Unidades disponibles (nunca negativo)
        price: Precio unitario (Decimal, no negativo)
        image: URL o nombre de archivo de imagen
        category: Categoría adjunta al leer (enriquecimiento)
    """
    name: str = ''
    category_id: Optional[int] = None
    stock: int = 0
    price: Decimal = Decimal('0')
    image: str = ''
    sku: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[Category] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'category_id': self.category_id,
            'sku': self.sku,
            'name': self.name,
            'stock': self.stock,
            'price': _format_money(self.price),
            'image': self.image,
            'created_at': _format_dt(self.created_at),
            'updated_at': _format_dt(self.updated_at),
            'category': self.category.to_dict() if self.category else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        category = data.get('category')
        return cls(
            id=data.get('id'),
            category_id=data.get('category_id'),
            sku=data.get('sku', ''),
            name=data.get('name', ''),
            stock=int(data.get('stock', 0)),
            price=to_decimal(data.get('price', 0)),
            image=data.get('image', ''),
            created_at=_parse_dt(data.get('created_at')),
            updated_at=_parse_dt(data.get('updated_at')),
            category=Category.from_dict(category) if category else None,
        )


# ==============================================================================
# ENTIDADES DE PAGO
# ==============================================================================

@dataclass
class Payment:
    """Método de pago (efectivo, billetera electrónica, POS/EDC)."""
    name: str = ''
    type: PaymentType = PaymentType.CASH
    logo: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type.value if isinstance(self.type, Enum) else self.type,
            'logo': self.logo,
            'created_at': _format_dt(self.created_at),
            'updated_at': _format_dt(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Payment':
        return cls(
            id=data.get('id'),
            name=data.get('name', ''),
            type=PaymentType(data.get('type', PaymentType.CASH.value)),
            logo=data.get('logo', ''),
            created_at=_parse_dt(data.get('created_at')),
            updated_at=_parse_dt(data.get('updated_at')),
        )


# ==============================================================================
# ENTIDADES DE ÓRDENES
# ==============================================================================

@dataclass
class OrderProduct:
    """
    Línea de una orden: (producto, cantidad) con su total calculado.

    total_price es una foto del precio al momento de la orden
    (price × quantity), no un enlace vivo al producto.
    """
    product_id: int = 0
    quantity: int = 0
    total_price: Decimal = Decimal('0')
    id: Optional[int] = None
    order_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    product: Optional[Product] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'order_id': self.order_id,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'total_price': _format_money(self.total_price),
            'created_at': _format_dt(self.created_at),
            'updated_at': _format_dt(self.updated_at),
            'product': self.product.to_dict() if self.product else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderProduct':
        product = data.get('product')
        return cls(
            id=data.get('id'),
            order_id=data.get('order_id'),
            product_id=data.get('product_id', 0),
            quantity=int(data.get('quantity', 0)),
            total_price=to_decimal(data.get('total_price', 0)),
            created_at=_parse_dt(data.get('created_at')),
            updated_at=_parse_dt(data.get('updated_at')),
            product=Product.from_dict(product) if product else None,
        )


@dataclass
class Order:
    """
    Orden de venta.

    Invariantes:
        total_price == suma de total_price de las líneas
        total_paid >= total_price
        total_return == total_paid - total_price
    """
    user_id: int = 0
    payment_id: int = 0
    customer_name: str = ''
    total_paid: Decimal = Decimal('0')
    total_price: Decimal = Decimal('0')
    total_return: Decimal = Decimal('0')
    products: List[OrderProduct] = field(default_factory=list)
    receipt_code: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[User] = None
    payment: Optional[Payment] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'payment_id': self.payment_id,
            'customer_name': self.customer_name,
            'total_price': _format_money(self.total_price),
            'total_paid': _format_money(self.total_paid),
            'total_return': _format_money(self.total_return),
            'receipt_code': self.receipt_code,
            'products': [p.to_dict() for p in self.products],
            'created_at': _format_dt(self.created_at),
            'updated_at': _format_dt(self.updated_at),
            'user': self.user.to_dict() if self.user else None,
            'payment': self.payment.to_dict() if self.payment else None,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Versión para respuestas HTTP (sin hash de contraseña del usuario)."""
        data = self.to_dict()
        if self.user:
            data['user'] = self.user.to_public_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        user = data.get('user')
        payment = data.get('payment')
        return cls(
            id=data.get('id'),
            user_id=data.get('user_id', 0),
            payment_id=data.get('payment_id', 0),
            customer_name=data.get('customer_name', ''),
            total_price=to_decimal(data.get('total_price', 0)),
            total_paid=to_decimal(data.get('total_paid', 0)),
            total_return=to_decimal(data.get('total_return', 0)),
            receipt_code=data.get('receipt_code', ''),
            products=[OrderProduct.from_dict(p) for p in data.get('products', [])],
            created_at=_parse_dt(data.get('created_at')),
            updated_at=_parse_dt(data.get('updated_at')),
            user=User.from_dict(user) if user else None,
            payment=Payment.from_dict(payment) if payment else None,
        )
