# ==============================================================================
# PROFILING DE LA API
# ==============================================================================
# Registra cuánto tarda cada petición HTTP y cada caso de uso
# (crear orden, listar órdenes, login...). Un registro por línea:
#
#   2024-05-01 12:00:00 | INFO     | Crear orden | user=3 | POST /v1/orders | 41 ms
#
# Archivos en LOGS_DIR:
#   requests.log   → todas las peticiones
#   slow.log       → peticiones y casos de uso sobre el umbral
#
# ACTIVAR/DESACTIVAR: POS_ENABLE_PROFILING=1/0 (o app.config['ENABLE_PROFILING'])
# ==============================================================================

import os
import threading
import time
from collections import defaultdict
from datetime import datetime
from functools import wraps

ENABLE_PROFILING = os.environ.get('POS_ENABLE_PROFILING', '1') not in ('0', 'false', 'False')

# Umbrales en milisegundos
SLOW_MS = 300
CRITICAL_MS = 700

LOGS_DIR = os.environ.get('POS_LOGS_DIR') or os.path.join(os.path.dirname(__file__), 'logs')

REQUESTS_LOG = 'requests.log'
SLOW_LOG = 'slow.log'

# Nombre legible por "MÉTODO regla"
ACTIONS = {
    'POST /v1/users': 'Registrar usuario',
    'POST /v1/users/login': 'Iniciar sesión',
    'GET /v1/users': 'Listar usuarios',
    'GET /v1/users/<int:user_id>': 'Ver usuario',
    'PUT /v1/users/<int:user_id>': 'Editar usuario',
    'DELETE /v1/users/<int:user_id>': 'Eliminar usuario',
    'GET /v1/categories': 'Listar categorías',
    'POST /v1/categories': 'Crear categoría',
    'GET /v1/products': 'Listar productos',
    'POST /v1/products': 'Crear producto',
    'GET /v1/payments': 'Listar métodos de pago',
    'POST /v1/payments': 'Crear método de pago',
    'POST /v1/orders': 'Crear orden',
    'GET /v1/orders': 'Listar órdenes',
    'GET /v1/orders/<int:order_id>': 'Ver orden',
}

_log_lock = threading.Lock()

# Estado en ejecución; init_profiling lo fija desde la config de la app
_enabled = ENABLE_PROFILING

# {nombre: {calls, errors, total_ms, max_ms}}
_stats = defaultdict(lambda: {'calls': 0, 'errors': 0, 'total_ms': 0.0, 'max_ms': 0.0})
_stats_lock = threading.Lock()


def _level(elapsed_ms):
    if elapsed_ms >= CRITICAL_MS:
        return 'CRITICAL'
    if elapsed_ms >= SLOW_MS:
        return 'WARNING'
    return 'INFO'


def _append(filename, line):
    """Agrega una línea al log. Los errores de escritura se ignoran."""
    path = os.path.join(LOGS_DIR, filename)
    try:
        with _log_lock:
            os.makedirs(LOGS_DIR, exist_ok=True)
            with open(path, 'a', encoding='utf-8') as f:
                f.write(line + '\n')
    except OSError:
        pass


def format_record(level, action, elapsed_ms, user=None, detail=''):
    stamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    parts = [stamp, f"{level:<8}", action, f"user={user if user is not None else '-'}"]
    if detail:
        parts.append(detail)
    parts.append(f"{elapsed_ms:.0f} ms")
    return ' | '.join(parts)


def action_name(method, rule):
    return ACTIONS.get(f"{method} {rule}", f"{method} {rule}")


def log_request(method, path, rule, elapsed_ms, user=None):
    """Registra una petición; si es lenta también va a slow.log."""
    level = _level(elapsed_ms)
    line = format_record(level, action_name(method, rule), elapsed_ms, user, f"{method} {path}")
    _append(REQUESTS_LOG, line)
    if level != 'INFO':
        _append(SLOW_LOG, line)


# ═══════════════════════════════════════════════════════════════════════════
# HOOKS DE FLASK
# ═══════════════════════════════════════════════════════════════════════════

def set_profiling_enabled(flag):
    """Activa o desactiva el profiling del proceso (peticiones y casos de uso)."""
    global _enabled
    _enabled = bool(flag)


def is_profiling_enabled():
    return _enabled


def init_profiling(app):
    """
    Registra before_request/after_request para medir cada petición.
    Con ENABLE_PROFILING en False no registra hooks y @profile_function
    deja de acumular estadísticas.
    """
    set_profiling_enabled(app.config.get('ENABLE_PROFILING', ENABLE_PROFILING))
    if not _enabled:
        return

    from flask import g, request

    @app.before_request
    def _start_timer():
        g.profiling_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        start = g.pop('profiling_start', None)
        if start is None:
            return response
        elapsed = (time.perf_counter() - start) * 1000
        rule = request.url_rule.rule if request.url_rule else request.path
        log_request(request.method, request.path, rule, elapsed, g.get('user_id'))
        return response


# ═══════════════════════════════════════════════════════════════════════════
# DECORADOR PARA CASOS DE USO
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Mide un caso de uso y acumula estadísticas en memoria.

    Uso:
        @profile_function(name='Crear orden')
        def create_order(self, order):
            ...

    Las llamadas que terminan en excepción cuentan en 'errors'
    (la excepción se propaga igual).
    """
    def decorator(fn):
        label = name or fn.__qualname__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not _enabled:
                return fn(*args, **kwargs)

            start = time.perf_counter()
            failed = True
            try:
                result = fn(*args, **kwargs)
                failed = False
                return result
            finally:
                elapsed = (time.perf_counter() - start) * 1000
                with _stats_lock:
                    entry = _stats[label]
                    entry['calls'] += 1
                    entry['errors'] += int(failed)
                    entry['total_ms'] += elapsed
                    entry['max_ms'] = max(entry['max_ms'], elapsed)
                if elapsed >= SLOW_MS:
                    _append(SLOW_LOG, format_record(_level(elapsed), label, elapsed))

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


def get_function_stats():
    """
    Returns:
        dict: {nombre: {calls, errors, avg_ms, max_ms}}
    """
    with _stats_lock:
        return {
            label: {
                'calls': s['calls'],
                'errors': s['errors'],
                'avg_ms': round(s['total_ms'] / s['calls'], 2) if s['calls'] else 0,
                'max_ms': round(s['max_ms'], 2),
            }
            for label, s in _stats.items()
        }


def reset_stats():
    with _stats_lock:
        _stats.clear()


__all__ = [
    'ENABLE_PROFILING',
    'init_profiling',
    'set_profiling_enabled',
    'is_profiling_enabled',
    'profile_function',
    'log_request',
    'get_function_stats',
    'reset_stats',
]
