# ==============================================================================
# SERVICIO DE MÉTODOS DE PAGO
# ==============================================================================
# CRUD de métodos de pago (efectivo, billetera electrónica, EDC).
# Misma política de caché que categorías:
#   "payment:<id>", "payments:<skip>-<limit>", invalidación "payments:*"
# ==============================================================================

from typing import Any, Dict, List

from app_pos.cache import ICacheRepository, generate_cache_key, generate_cache_key_params
from app_pos.models import ConflictingDataError, DataNotFoundError, Payment, PaymentType
from app_pos.repositories.interfaces import IPaymentRepository
from app_pos.services.base import BaseService, storage_errors


class PaymentService(BaseService):
    """Servicio para gestión de métodos de pago."""

    CACHE_PREFIX = 'payment'
    COLLECTION_PREFIX = 'payments'
    UPDATABLE_FIELDS = ('name', 'type', 'logo')

    def __init__(self, payment_repo: IPaymentRepository, cache: ICacheRepository):
        super().__init__(cache)
        self.payment_repo = payment_repo

    def create_payment(self, payment: Payment) -> Payment:
        """
        Crea un método de pago.

        Raises:
            ConflictingDataError: Si el nombre ya existe
        """
        with storage_errors(ConflictingDataError):
            payment = self.payment_repo.create_payment(payment)

        self._cache_set(generate_cache_key(self.CACHE_PREFIX, payment.id), payment)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return payment

    def get_payment(self, payment_id: int) -> Payment:
        cache_key = generate_cache_key(self.CACHE_PREFIX, payment_id)
        payment = self._cache_get(cache_key, Payment)
        if payment is not None:
            return payment

        with storage_errors(DataNotFoundError):
            payment = self.payment_repo.get_payment_by_id(payment_id)

        self._cache_set(cache_key, payment)
        return payment

    def list_payments(self, skip: int, limit: int) -> List[Payment]:
        params = generate_cache_key_params(skip, limit)
        cache_key = generate_cache_key(self.COLLECTION_PREFIX, params)
        payments = self._cache_get(cache_key, Payment, many=True)
        if payments is not None:
            return payments

        with storage_errors():
            payments = self.payment_repo.list_payments(skip, limit)

        self._cache_set(cache_key, payments)
        return payments

    def update_payment(self, payment_id: int, updates: Dict[str, Any]) -> Payment:
        """
        Actualiza un método de pago.

        Args:
            updates: Campos a actualizar (name, type, logo)

        Raises:
            DataNotFoundError, NoUpdatedDataError, ConflictingDataError
        """
        with storage_errors(DataNotFoundError):
            existing = self.payment_repo.get_payment_by_id(payment_id)

        updates = dict(updates or {})
        if updates.get('type'):
            updates['type'] = PaymentType(updates['type'])
        changes = self._changed_fields(existing, updates, self.UPDATABLE_FIELDS)

        with storage_errors(DataNotFoundError, ConflictingDataError):
            payment = self.payment_repo.update_payment(payment_id, changes)

        cache_key = generate_cache_key(self.CACHE_PREFIX, payment_id)
        self._cache_delete(cache_key)
        self._cache_set(cache_key, payment)
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")
        return payment

    def delete_payment(self, payment_id: int) -> None:
        with storage_errors(DataNotFoundError):
            self.payment_repo.get_payment_by_id(payment_id)

        self._cache_delete(generate_cache_key(self.CACHE_PREFIX, payment_id))
        self._cache_invalidate(f"{self.COLLECTION_PREFIX}:*")

        with storage_errors(DataNotFoundError):
            self.payment_repo.delete_payment(payment_id)
