# ==============================================================================
# INTERFACES DE REPOSITORIOS - PREPARADO PARA POSTGRESQL
# ==============================================================================
#
# Este archivo define las interfaces (protocolos) que todos los repositorios
# deben implementar. Cada servicio depende solo del conjunto de capacidades
# que usa, no de la clase concreta (JSON hoy, PostgreSQL después).
#
# CONTRATO DE ERRORES:
#   - DataNotFoundError     → la entidad no existe
#   - ConflictingDataError  → violación de unicidad
#   - cualquier otra excepción es un fallo del almacenamiento
#
# ==============================================================================

from typing import Any, ContextManager, Dict, List, Optional, Protocol, runtime_checkable

from app_pos.models import Category, Order, Payment, Product, User


@runtime_checkable
class IUserRepository(Protocol):
    """Interfaz para el repositorio de usuarios."""

    def create_user(self, user: User) -> User:
        ...

    def get_user_by_id(self, user_id: int) -> User:
        ...

    def get_user_by_email(self, email: str) -> User:
        ...

    def list_users(self, skip: int, limit: int) -> List[User]:
        ...

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> User:
        ...

    def delete_user(self, user_id: int) -> None:
        ...


@runtime_checkable
class ICategoryRepository(Protocol):
    """Interfaz para el repositorio de categorías."""

    def create_category(self, category: Category) -> Category:
        ...

    def get_category_by_id(self, category_id: int) -> Category:
        ...

    def list_categories(self, skip: int, limit: int) -> List[Category]:
        ...

    def update_category(self, category_id: int, updates: Dict[str, Any]) -> Category:
        ...

    def delete_category(self, category_id: int) -> None:
        ...


@runtime_checkable
class IProductRepository(Protocol):
    """Interfaz para el repositorio de productos."""

    def create_product(self, product: Product) -> Product:
        ...

    def get_product_by_id(self, product_id: int) -> Product:
        ...

    def list_products(
        self,
        search: str,
        category_id: Optional[int],
        skip: int,
        limit: int
    ) -> List[Product]:
        ...

    def update_product(self, product_id: int, updates: Dict[str, Any]) -> Product:
        ...

    def delete_product(self, product_id: int) -> None:
        ...


@runtime_checkable
class IPaymentRepository(Protocol):
    """Interfaz para el repositorio de métodos de pago."""

    def create_payment(self, payment: Payment) -> Payment:
        ...

    def get_payment_by_id(self, payment_id: int) -> Payment:
        ...

    def list_payments(self, skip: int, limit: int) -> List[Payment]:
        ...

    def update_payment(self, payment_id: int, updates: Dict[str, Any]) -> Payment:
        ...

    def delete_payment(self, payment_id: int) -> None:
        ...


@runtime_checkable
class IOrderRepository(Protocol):
    """Interfaz para el repositorio de órdenes."""

    def create_order(self, order: Order) -> Order:
        ...

    def get_order_by_id(self, order_id: int) -> Order:
        ...

    def list_orders(self, skip: int, limit: int) -> List[Order]:
        ...


@runtime_checkable
class IUnitOfWork(Protocol):
    """
    Capacidad transaccional pasada a los servicios.

    Uso:
        with uow.transaction():
            ...  # si el bloque lanza, nada de lo escrito queda persistido
    """

    def transaction(self) -> ContextManager[Any]:
        ...
