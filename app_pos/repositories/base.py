# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para acceso a archivos JSON
# ==============================================================================
# Formato de cada archivo:
#   {"seq": <último id asignado>, "records": {"1": {...}, "2": {...}}}
#
# - Los ids son enteros crecientes y NUNCA se reutilizan (la caché usa
#   "<entidad>:<id>" como clave y no debe confundir registros)
# - Las escrituras son atómicas (archivo temporal + os.replace)
# - Un único RLock compartido serializa el acceso; la unidad de trabajo
#   (unit_of_work.py) lo toma para agrupar varias operaciones
# ==============================================================================

import json
import os
import threading
from abc import ABC
from typing import Any, Callable, Dict, List, Optional

from app_pos.models import ConflictingDataError, DataNotFoundError, utcnow


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.
    Proporciona lectura/escritura de archivos JSON con manejo
    de concurrencia mediante locks.

    Al migrar a PostgreSQL:
    - Los métodos _read_raw/_write_raw se convierten en queries SQL
    - El lock se reemplaza por transacciones de BD
    """

    # Lock global: compartido por todos los repositorios y la unidad de trabajo
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Inicializa el repositorio con la ruta al archivo JSON.

        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Crea el archivo (y su carpeta) con datos vacíos si no existe."""
        with self._file_lock:
            directory = os.path.dirname(self.file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            if not os.path.exists(self.file_path):
                self._write_raw(self._empty_data())

    def _empty_data(self) -> Dict[str, Any]:
        return {'seq': 0, 'records': {}}

    def _read_raw(self) -> Dict[str, Any]:
        """
        Lee los datos crudos del archivo JSON.

        Raises:
            json.JSONDecodeError: Si el archivo tiene JSON inválido
            OSError: Si hay error de lectura
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except FileNotFoundError:
                return self._empty_data()

    def _write_raw(self, data: Dict[str, Any]) -> None:
        """
        Escribe datos al archivo JSON de forma atómica.

        Raises:
            OSError: Si hay error de escritura
        """
        with self._file_lock:
            # Escribir a archivo temporal primero para atomicidad
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except Exception:
                # Limpiar archivo temporal si algo falla
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise

    def snapshot(self) -> Dict[str, Any]:
        """Copia completa del contenido actual (para rollback)."""
        return self._read_raw()

    def restore(self, data: Dict[str, Any]) -> None:
        """Restaura una copia tomada con snapshot()."""
        self._write_raw(data)


class DictRepository(BaseRepository):
    """
    Repositorio base para registros indexados por id.

    Las subclases definen:
        entity_name: Nombre para mensajes de error
        unique_fields: Campos que no pueden repetirse entre registros
    """

    entity_name = 'registro'
    unique_fields: tuple = ()

    # =========================================================================
    # VALIDACIONES
    # =========================================================================

    def _check_unique(
        self,
        records: Dict[str, Dict[str, Any]],
        record: Dict[str, Any],
        exclude_id: Optional[int] = None
    ) -> None:
        """
        Verifica las restricciones de unicidad.

        Raises:
            ConflictingDataError: Si otro registro tiene el mismo valor
        """
        for field_name in self.unique_fields:
            value = record.get(field_name)
            if value in (None, ''):
                continue
            for rid, other in records.items():
                if exclude_id is not None and int(rid) == exclude_id:
                    continue
                if other.get(field_name) == value:
                    raise ConflictingDataError(
                        f"Ya existe un {self.entity_name} con {field_name} '{value}'"
                    )

    # =========================================================================
    # OPERACIONES CRUD
    # =========================================================================

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Inserta un registro asignando id y timestamps.

        Returns:
            Registro almacenado (con id)
        """
        with self._file_lock:
            data = self._read_raw()
            records = data['records']
            self._check_unique(records, record)

            data['seq'] = int(data.get('seq', 0)) + 1
            now = utcnow().isoformat()
            stored = dict(record, id=data['seq'], created_at=now, updated_at=now)
            records[str(stored['id'])] = stored
            self._write_raw(data)
            return dict(stored)

    def get_record(self, record_id: int) -> Dict[str, Any]:
        """
        Obtiene un registro por su ID.

        Raises:
            DataNotFoundError: Si no existe
        """
        record = self._read_raw()['records'].get(str(record_id))
        if record is None:
            raise DataNotFoundError(f"{self.entity_name.capitalize()} {record_id} no encontrado")
        return dict(record)

    def find_by(self, field_name: str, value: Any) -> Optional[Dict[str, Any]]:
        """Primer registro cuyo campo coincide, o None."""
        for record in self._read_raw()['records'].values():
            if record.get(field_name) == value:
                return dict(record)
        return None

    def list_records(
        self,
        skip: int,
        limit: int,
        predicate: Callable[[Dict[str, Any]], bool] = None
    ) -> List[Dict[str, Any]]:
        """
        Lista registros paginados, ordenados por id.

        Args:
            skip: Número de página (empieza en 1)
            limit: Tamaño de página
            predicate: Filtro opcional
        """
        records = sorted(self._read_raw()['records'].values(), key=lambda r: r['id'])
        if predicate is not None:
            records = [r for r in records if predicate(r)]
        offset = max(int(skip) - 1, 0) * int(limit)
        return [dict(r) for r in records[offset:offset + int(limit)]]

    def update_record(self, record_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Actualiza los campos indicados (los valores None se ignoran).

        Raises:
            DataNotFoundError: Si no existe
            ConflictingDataError: Si viola unicidad
        """
        with self._file_lock:
            data = self._read_raw()
            records = data['records']
            current = records.get(str(record_id))
            if current is None:
                raise DataNotFoundError(f"{self.entity_name.capitalize()} {record_id} no encontrado")

            filtered = {k: v for k, v in changes.items() if v is not None and k != 'id'}
            updated = dict(current, **filtered)
            self._check_unique(records, updated, exclude_id=int(record_id))
            updated['updated_at'] = utcnow().isoformat()
            records[str(record_id)] = updated
            self._write_raw(data)
            return dict(updated)

    def delete_record(self, record_id: int) -> None:
        """
        Elimina un registro.

        Raises:
            DataNotFoundError: Si no existe
        """
        with self._file_lock:
            data = self._read_raw()
            if data['records'].pop(str(record_id), None) is None:
                raise DataNotFoundError(f"{self.entity_name.capitalize()} {record_id} no encontrado")
            self._write_raw(data)
