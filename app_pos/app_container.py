# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# de repositorios, caché y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (cada test puede usar su propia carpeta de datos)
#   - Migración gradual (cambiar repos sin tocar servicios)
#
# ═══════════════════════════════════════════════════════════════════════════════
# MIGRACIÓN A POSTGRESQL
# ═══════════════════════════════════════════════════════════════════════════════
# 1. Crear PgUserRepository, PgOrderRepository, etc. (mismas interfaces)
# 2. Reemplazar JsonUnitOfWork por una unidad de trabajo sobre la conexión
# 3. Cambiar las construcciones de este archivo
# Los servicios NO requieren cambios.
# ==============================================================================

import os
from typing import Optional

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de persistencia (JSON ahora)
# ═══════════════════════════════════════════════════════════════════════════════
from app_pos.repositories import (
    CategoryRepository,
    JsonUnitOfWork,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    UserRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# CACHÉ Y SERVICIOS
# ═══════════════════════════════════════════════════════════════════════════════
from app_pos.cache import ICacheRepository, MemoryCache
from app_pos.services import (
    AuthService,
    CategoryService,
    OrderService,
    PaymentService,
    ProductService,
    TokenService,
    UserService,
)
from app_pos import config


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Cada propiedad crea su instancia la primera vez que se usa y la
    reutiliza después (una sola instancia por contenedor).

    Uso:
        container = AppContainer(data_dir='/ruta/a/datos')
        order_service = container.order_service
    """

    def __init__(
        self,
        data_dir: str = None,
        secret_key: str = None,
        token_duration: int = None,
        cache: ICacheRepository = None
    ):
        """
        Inicializa el contenedor.

        Args:
            data_dir: Carpeta donde están los JSON
            secret_key: Clave de firma de tokens
            token_duration: Vigencia de los tokens en segundos
            cache: Caché a usar (por defecto MemoryCache)
        """
        self._data_dir = data_dir or config.DATA_DIR
        self._secret_key = secret_key or config.SECRET_KEY
        self._token_duration = token_duration or config.TOKEN_DURATION
        self._cache = cache

        os.makedirs(self._data_dir, exist_ok=True)

        # Repositorios (lazy loading)
        self._user_repo: Optional[UserRepository] = None
        self._category_repo: Optional[CategoryRepository] = None
        self._product_repo: Optional[ProductRepository] = None
        self._payment_repo: Optional[PaymentRepository] = None
        self._order_repo: Optional[OrderRepository] = None
        self._uow: Optional[JsonUnitOfWork] = None

        # Servicios (lazy loading)
        self._category_service: Optional[CategoryService] = None
        self._product_service: Optional[ProductService] = None
        self._payment_service: Optional[PaymentService] = None
        self._user_service: Optional[UserService] = None
        self._token_service: Optional[TokenService] = None
        self._auth_service: Optional[AuthService] = None
        self._order_service: Optional[OrderService] = None

    @property
    def data_dir(self) -> str:
        return self._data_dir

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def user_repo(self) -> UserRepository:
        if self._user_repo is None:
            self._user_repo = UserRepository(self._data_dir)
        return self._user_repo

    @property
    def category_repo(self) -> CategoryRepository:
        if self._category_repo is None:
            self._category_repo = CategoryRepository(self._data_dir)
        return self._category_repo

    @property
    def product_repo(self) -> ProductRepository:
        if self._product_repo is None:
            self._product_repo = ProductRepository(self._data_dir)
        return self._product_repo

    @property
    def payment_repo(self) -> PaymentRepository:
        if self._payment_repo is None:
            self._payment_repo = PaymentRepository(self._data_dir)
        return self._payment_repo

    @property
    def order_repo(self) -> OrderRepository:
        if self._order_repo is None:
            self._order_repo = OrderRepository(self._data_dir)
        return self._order_repo

    @property
    def uow(self) -> JsonUnitOfWork:
        """Unidad de trabajo de las órdenes (orders.json + products.json)."""
        if self._uow is None:
            self._uow = JsonUnitOfWork(self.order_repo, self.product_repo)
        return self._uow

    @property
    def cache(self) -> ICacheRepository:
        if self._cache is None:
            self._cache = MemoryCache()
        return self._cache

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def category_service(self) -> CategoryService:
        if self._category_service is None:
            self._category_service = CategoryService(self.category_repo, self.cache)
        return self._category_service

    @property
    def product_service(self) -> ProductService:
        if self._product_service is None:
            self._product_service = ProductService(
                self.product_repo,
                self.category_repo,
                self.cache
            )
        return self._product_service

    @property
    def payment_service(self) -> PaymentService:
        if self._payment_service is None:
            self._payment_service = PaymentService(self.payment_repo, self.cache)
        return self._payment_service

    @property
    def user_service(self) -> UserService:
        if self._user_service is None:
            self._user_service = UserService(self.user_repo, self.cache)
        return self._user_service

    @property
    def token_service(self) -> TokenService:
        if self._token_service is None:
            self._token_service = TokenService(self._secret_key, self._token_duration)
        return self._token_service

    @property
    def auth_service(self) -> AuthService:
        if self._auth_service is None:
            self._auth_service = AuthService(self.user_repo, self.token_service)
        return self._auth_service

    @property
    def order_service(self) -> OrderService:
        """Servicio de órdenes (depende de casi todos los repositorios)."""
        if self._order_service is None:
            self._order_service = OrderService(
                self.order_repo,
                self.product_repo,
                self.category_repo,
                self.user_repo,
                self.payment_repo,
                self.cache,
                self.uow
            )
        return self._order_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def close(self) -> None:
        """Libera la caché y descarta todas las instancias."""
        if self._cache is not None and hasattr(self._cache, 'close'):
            self._cache.close()

        self._user_repo = None
        self._category_repo = None
        self._product_repo = None
        self._payment_repo = None
        self._order_repo = None
        self._uow = None

        self._category_service = None
        self._product_service = None
        self._payment_service = None
        self._user_service = None
        self._token_service = None
        self._auth_service = None
        self._order_service = None
