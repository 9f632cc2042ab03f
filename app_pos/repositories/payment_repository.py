# ==============================================================================
# REPOSITORIO DE MÉTODOS DE PAGO
# ==============================================================================
# Encapsula todo el acceso a payments.json (nombre único).
# ==============================================================================

import os
from typing import Any, Dict, List

from app_pos.models import Payment
from app_pos.repositories.base import DictRepository


class PaymentRepository(DictRepository):
    """Repositorio para gestión de métodos de pago."""

    entity_name = 'método de pago'
    unique_fields = ('name',)

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'payments.json'))

    def create_payment(self, payment: Payment) -> Payment:
        record = payment.to_dict()
        for key in ('id', 'created_at', 'updated_at'):
            record.pop(key, None)
        return Payment.from_dict(self.insert(record))

    def get_payment_by_id(self, payment_id: int) -> Payment:
        return Payment.from_dict(self.get_record(payment_id))

    def list_payments(self, skip: int, limit: int) -> List[Payment]:
        return [Payment.from_dict(r) for r in self.list_records(skip, limit)]

    def update_payment(self, payment_id: int, updates: Dict[str, Any]) -> Payment:
        changes = dict(updates)
        if changes.get('type') is not None:
            changes['type'] = getattr(changes['type'], 'value', changes['type'])
        return Payment.from_dict(self.update_record(payment_id, changes))

    def delete_payment(self, payment_id: int) -> None:
        self.delete_record(payment_id)
