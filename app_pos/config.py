# ==============================================================================
# CONFIGURACIÓN - Variables de entorno
# ==============================================================================
# Todas son opcionales. create_app(config) puede sobreescribirlas por app.
#
#   POS_APP_NAME          Nombre de la aplicación
#   POS_APP_ENV           development | production
#   POS_DATA_DIR          Carpeta de los archivos JSON
#   POS_SECRET_KEY        Clave de firma de tokens (OBLIGATORIA en producción)
#   POS_TOKEN_DURATION    Vigencia del token en segundos
#   POS_HTTP_HOST/PORT    Dirección del servidor de desarrollo
#   POS_ADMIN_NAME/EMAIL/PASSWORD  Administrador inicial
# ==============================================================================

import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

APP_NAME = os.environ.get('POS_APP_NAME', 'app_pos')
APP_ENV = os.environ.get('POS_APP_ENV', 'development')
PRODUCTION_MODE = APP_ENV == 'production'

DATA_DIR = os.environ.get('POS_DATA_DIR') or os.path.join(BASE_DIR, 'data')

_DEFAULT_SECRET = 'app_pos_dev_secret_key_change_in_production'
SECRET_KEY = os.environ.get('POS_SECRET_KEY')

if PRODUCTION_MODE and not SECRET_KEY:
    print("[ADVERTENCIA] POS_APP_ENV=production sin POS_SECRET_KEY definida")
    print("[ADVERTENCIA] Define la variable de entorno para mayor seguridad")

SECRET_KEY = SECRET_KEY or _DEFAULT_SECRET


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


TOKEN_DURATION = _to_int(os.environ.get('POS_TOKEN_DURATION'), 3600)

HTTP_HOST = os.environ.get('POS_HTTP_HOST', '0.0.0.0')
HTTP_PORT = _to_int(os.environ.get('POS_HTTP_PORT'), 5000)

ADMIN_NAME = os.environ.get('POS_ADMIN_NAME', 'Administrador')
ADMIN_EMAIL = os.environ.get('POS_ADMIN_EMAIL')
ADMIN_PASSWORD = os.environ.get('POS_ADMIN_PASSWORD')


def as_flask_config():
    """Valores por defecto para app.config."""
    return {
        'APP_NAME': APP_NAME,
        'DATA_DIR': DATA_DIR,
        'SECRET_KEY': SECRET_KEY,
        'TOKEN_DURATION': TOKEN_DURATION,
        'ADMIN_NAME': ADMIN_NAME,
        'ADMIN_EMAIL': ADMIN_EMAIL,
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
    }
