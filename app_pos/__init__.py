# ==============================================================================
# APP POS - Backend de punto de venta
# ==============================================================================
# ├── models/        → Entidades y errores del dominio
# ├── cache/         → Puerto de caché, caché en memoria, codec
# ├── repositories/  → Persistencia JSON + unidad de trabajo
# ├── services/      → Casos de uso (órdenes, catálogo, usuarios, auth)
# ├── app_container.py → Inyección de dependencias
# └── main.py        → API HTTP (Flask)
# ==============================================================================

__version__ = '1.0.0'
