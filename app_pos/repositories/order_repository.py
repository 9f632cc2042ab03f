# ==============================================================================
# REPOSITORIO DE ÓRDENES
# ==============================================================================
# Encapsula todo el acceso a orders.json
# Una orden se guarda con sus líneas embebidas; cada línea recibe su
# propio id desde una segunda secuencia ("line_seq").
# Usuario, pago y productos adjuntos (enriquecimiento) NO se persisten.
# ==============================================================================

import os
import uuid
from typing import Any, Dict, List

from app_pos.models import Order, utcnow
from app_pos.repositories.base import DictRepository


class OrderRepository(DictRepository):
    """Repositorio para órdenes de venta (solo alta y lectura)."""

    entity_name = 'orden'
    unique_fields = ('receipt_code',)

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'orders.json'))

    def _empty_data(self) -> Dict[str, Any]:
        return {'seq': 0, 'line_seq': 0, 'records': {}}

    @staticmethod
    def _to_record(order: Order) -> Dict[str, Any]:
        record = order.to_dict()
        record.pop('user', None)
        record.pop('payment', None)
        for line in record['products']:
            line.pop('product', None)
        return record

    def create_order(self, order: Order) -> Order:
        """
        Persiste una orden y sus líneas en una sola escritura.

        Returns:
            Orden almacenada con ids, receipt_code y timestamps
        """
        with self._file_lock:
            data = self._read_raw()
            records = data['records']

            data['seq'] = int(data.get('seq', 0)) + 1
            order_id = data['seq']
            now = utcnow().isoformat()

            record = self._to_record(order)
            record.update(
                id=order_id,
                receipt_code=record.get('receipt_code') or str(uuid.uuid4()),
                created_at=now,
                updated_at=now,
            )
            self._check_unique(records, record)

            for line in record['products']:
                data['line_seq'] = int(data.get('line_seq', 0)) + 1
                line.update(id=data['line_seq'], order_id=order_id, created_at=now, updated_at=now)

            records[str(order_id)] = record
            self._write_raw(data)
            return Order.from_dict(record)

    def get_order_by_id(self, order_id: int) -> Order:
        return Order.from_dict(self.get_record(order_id))

    def list_orders(self, skip: int, limit: int) -> List[Order]:
        return [Order.from_dict(r) for r in self.list_records(skip, limit)]
