# ==============================================================================
# SERVICIO DE ÓRDENES
# ==============================================================================
# Caso de uso central del punto de venta.
#
# CREAR ORDEN (una sola unidad de trabajo):
#   1. Validar cada línea: el producto existe y hay stock suficiente
#      (las cantidades del mismo producto en varias líneas se suman)
#   2. total de línea = precio actual × cantidad (foto del precio)
#   3. total_paid < total_price → InsufficientPaymentError
#   4. El usuario y el método de pago existen (DataNotFoundError si no)
#   5. Persistir la orden y descontar el stock
#   Si cualquier paso falla, nada queda escrito.
#
# DESPUÉS de confirmar la transacción:
#   6. Invalidar la caché de los productos vendidos y "products:*"
#   7. Adjuntar usuario, método de pago, productos y categorías
#   8. Invalidar "orders:*" y cachear la orden en "order:<id>"
#   Un fallo aquí devuelve error aunque la orden YA esté persistida.
# ==============================================================================

from decimal import Decimal
from typing import Dict, List, Optional

from app_pos.cache import ICacheRepository, generate_cache_key, generate_cache_key_params
from app_pos.models import (
    Category,
    DataNotFoundError,
    InsufficientPaymentError,
    InsufficientStockError,
    Order,
    Payment,
    Product,
    User,
)
from app_pos.performance_logger import profile_function
from app_pos.repositories.interfaces import (
    ICategoryRepository,
    IOrderRepository,
    IPaymentRepository,
    IProductRepository,
    IUnitOfWork,
    IUserRepository,
)
from app_pos.services.base import BaseService, storage_errors


class _Lookups:
    """Memo de lecturas de enriquecimiento dentro de una misma llamada."""

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.payments: Dict[int, Payment] = {}
        self.products: Dict[int, Product] = {}
        self.categories: Dict[int, Category] = {}


class OrderService(BaseService):
    """
    Servicio para gestión de órdenes.

    Responsabilidades:
    - Crear órdenes validando stock y pago
    - Descontar stock en la misma transacción que la orden
    - Leer órdenes enriquecidas (usuario, pago, productos, categorías)
    - Mantener la caché de órdenes coherente
    """

    CACHE_PREFIX = 'order'
    COLLECTION_PREFIX = 'orders'
    PRODUCT_CACHE_PREFIX = 'product'
    PRODUCT_COLLECTION_PREFIX = 'products'

    def __init__(
        self,
        order_repo: IOrderRepository,
        product_repo: IProductRepository,
        category_repo: ICategoryRepository,
        user_repo: IUserRepository,
        payment_repo: IPaymentRepository,
        cache: ICacheRepository,
        uow: IUnitOfWork
    ):
        """
        Args:
            order_repo: Repositorio de órdenes
            product_repo: Repositorio de productos (stock y precios)
            category_repo: Repositorio de categorías (enriquecimiento)
            user_repo: Repositorio de usuarios (enriquecimiento)
            payment_repo: Repositorio de métodos de pago (enriquecimiento)
            cache: Puerto de caché
            uow: Unidad de trabajo que agrupa orden + stock
        """
        super().__init__(cache)
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.category_repo = category_repo
        self.user_repo = user_repo
        self.payment_repo = payment_repo
        self.uow = uow

    # =========================================================================
    # CREACIÓN
    # =========================================================================

    @profile_function(name='Crear orden')
    def create_order(self, order: Order) -> Order:
        """
        Crea una orden.

        Args:
            order: Orden con user_id, payment_id, total_paid y sus líneas
                   (product_id, quantity)

        Returns:
            Orden persistida y enriquecida

        Raises:
            DataNotFoundError: Si un producto, el usuario o el pago no existen
            InsufficientStockError: Si una línea supera el stock
            InsufficientPaymentError: Si total_paid < total_price
            InternalError: Cualquier otro fallo
        """
        lookups = _Lookups()
        with self.uow.transaction():
            products, requested = self._price_lines(order)

            total_price = sum((line.total_price for line in order.products), Decimal('0'))
            if order.total_paid < total_price:
                raise InsufficientPaymentError(
                    f"Pagado {order.total_paid}, total {total_price}"
                )

            order.total_price = total_price
            order.total_return = order.total_paid - total_price

            # Referencias (equivalente a las FK)
            self._lookup(lookups.users, order.user_id, self.user_repo.get_user_by_id)
            self._lookup(lookups.payments, order.payment_id, self.payment_repo.get_payment_by_id)

            with storage_errors():
                order = self.order_repo.create_order(order)
                for product_id, quantity in requested.items():
                    new_stock = products[product_id].stock - quantity
                    self.product_repo.update_product(product_id, {'stock': new_stock})

        for product_id in requested:
            self._cache_delete(generate_cache_key(self.PRODUCT_CACHE_PREFIX, product_id))
        self._cache_invalidate(f"{self.PRODUCT_COLLECTION_PREFIX}:*")

        self._enrich(order, lookups)

        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        self._cache_set(generate_cache_key(self.CACHE_PREFIX, order.id), order)
        return order

    def _price_lines(self, order: Order):
        """
        Valida stock y calcula el total de cada línea (in-place).

        Returns:
            Tupla ({product_id: producto}, {product_id: cantidad total pedida})
        """
        products: Dict[int, Product] = {}
        requested: Dict[int, int] = {}

        for line in order.products:
            product = products.get(line.product_id)
            if product is None:
                with storage_errors(DataNotFoundError):
                    product = self.product_repo.get_product_by_id(line.product_id)
                products[line.product_id] = product

            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity
            if requested[line.product_id] > product.stock:
                raise InsufficientStockError(
                    f"Stock insuficiente para '{product.name}'. "
                    f"Solicitado: {requested[line.product_id]}, Disponible: {product.stock}"
                )

            line.total_price = product.price * line.quantity

        return products, requested

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    @profile_function(name='Ver orden')
    def get_order(self, order_id: int) -> Order:
        """
        Obtiene una orden enriquecida (cache-first).

        Un valor de caché ilegible es InternalError (no se recurre al repositorio).

        Raises:
            DataNotFoundError: Si la orden o alguna referencia no existen
        """
        cache_key = generate_cache_key(self.CACHE_PREFIX, order_id)
        order = self._cache_get(cache_key, Order)
        if order is not None:
            return order

        with storage_errors(DataNotFoundError):
            order = self.order_repo.get_order_by_id(order_id)
        self._enrich(order, _Lookups())

        self._cache_set(cache_key, order)
        return order

    @profile_function(name='Listar órdenes')
    def list_orders(self, skip: int, limit: int) -> List[Order]:
        """
        Lista una página de órdenes enriquecidas (cache-first).

        Args:
            skip: Número de página (desde 1)
            limit: Tamaño de página
        """
        params = generate_cache_key_params(skip, limit)
        cache_key = generate_cache_key(self.COLLECTION_PREFIX, params)
        orders = self._cache_get(cache_key, Order, many=True)
        if orders is not None:
            return orders

        with storage_errors():
            orders = self.order_repo.list_orders(skip, limit)

        lookups = _Lookups()
        for order in orders:
            self._enrich(order, lookups)

        self._cache_set(cache_key, orders)
        return orders

    # =========================================================================
    # ENRIQUECIMIENTO
    # =========================================================================

    def _enrich(self, order: Order, lookups: _Lookups) -> Order:
        """Adjunta usuario, método de pago y, por línea, producto y categoría."""
        order.user = self._lookup(lookups.users, order.user_id, self.user_repo.get_user_by_id)
        order.payment = self._lookup(
            lookups.payments, order.payment_id, self.payment_repo.get_payment_by_id
        )

        for line in order.products:
            product = self._lookup(
                lookups.products, line.product_id, self.product_repo.get_product_by_id
            )
            product.category = self._lookup(
                lookups.categories, product.category_id, self.category_repo.get_category_by_id
            )
            line.product = product

        return order

    @staticmethod
    def _lookup(memo: Dict[int, object], entity_id: Optional[int], loader):
        if entity_id not in memo:
            with storage_errors(DataNotFoundError):
                memo[entity_id] = loader(entity_id)
        return memo[entity_id]
