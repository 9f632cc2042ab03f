# ==============================================================================
# API HTTP - Adaptador Flask
# ==============================================================================
# Capa delgada: valida la entrada, llama al servicio y traduce el
# resultado o el error del dominio a JSON.
#
#   Éxito: {"success": true, "message": "Success", "data": ...}
#   Error: {"success": false, "error": "<mensaje>"}
#
# Autenticación: "Authorization: Bearer <token>" (ver token_service.py)
# ==============================================================================

from decimal import Decimal, InvalidOperation
from functools import wraps

from flask import Blueprint, Flask, current_app, g, request
from werkzeug.exceptions import HTTPException

from app_pos import config
from app_pos.app_container import AppContainer
from app_pos.models import (
    Category,
    ConflictingDataError,
    DataNotFoundError,
    DomainError,
    ExpiredTokenError,
    ForbiddenError,
    InsufficientPaymentError,
    InsufficientStockError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    NoUpdatedDataError,
    Order,
    OrderProduct,
    Payment,
    PaymentType,
    Product,
    UnauthorizedError,
    User,
    UserRole,
    ValidationError,
    to_decimal,
)
from app_pos.performance_logger import ENABLE_PROFILING, init_profiling

api = Blueprint('api', __name__, url_prefix='/v1')

# Código HTTP por tipo de error (se recorre el MRO, gana la clase más específica)
ERROR_STATUS = {
    DataNotFoundError: 404,
    ConflictingDataError: 409,
    InsufficientStockError: 400,
    InsufficientPaymentError: 400,
    NoUpdatedDataError: 400,
    ValidationError: 400,
    InvalidCredentialsError: 401,
    UnauthorizedError: 401,
    InvalidTokenError: 401,
    ExpiredTokenError: 401,
    ForbiddenError: 403,
    InternalError: 500,
}


def _container() -> AppContainer:
    return current_app.extensions['app_pos']


def _ok(data=None):
    return {"success": True, "message": "Success", "data": data}, 200


def _error(message, status):
    return {"success": False, "error": message}, status


# ═══════════════════════════════════════════════════════════════════════════════
# AUTENTICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        scheme, _, token = request.headers.get('Authorization', '').partition(' ')
        if scheme.lower() != 'bearer' or not token.strip():
            raise UnauthorizedError()
        payload = _container().token_service.verify_token(token.strip())
        g.user_id = payload.user_id
        g.role = payload.role
        return f(*args, **kwargs)
    return wrapper


def role_required(role):
    def deco(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if g.get('role') != role:
                raise ForbiddenError()
            return f(*args, **kwargs)
        return login_required(wrapper)
    return deco


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDACIÓN DE ENTRADA
# ═══════════════════════════════════════════════════════════════════════════════

def to_int(v, default=None):
    if isinstance(v, bool):
        return default
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Se esperaba un objeto JSON")
    return data


def _required_str(data, key):
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{key}' es obligatorio")
    return value.strip()


def _optional_str(data, key):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' debe ser texto")
    return value.strip()


def _int_field(data, key, minimum=0, required=True):
    if data.get(key) is None and not required:
        return None
    value = to_int(data.get(key))
    if value is None or value < minimum:
        raise ValidationError(f"'{key}' debe ser un entero >= {minimum}")
    return value


def _money_field(data, key, required=True):
    if data.get(key) is None and not required:
        return None
    raw = data.get(key)
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValidationError(f"'{key}' debe ser un monto")
    try:
        value = to_decimal(raw)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"'{key}' debe ser un monto") from exc
    if not value.is_finite() or value < Decimal('0'):
        raise ValidationError(f"'{key}' debe ser un monto >= 0")
    return value


def _payment_type(data, required=True):
    raw = data.get('type')
    if raw is None and not required:
        return None
    try:
        return PaymentType(raw)
    except ValueError as exc:
        valid = ', '.join(t.value for t in PaymentType)
        raise ValidationError(f"'type' debe ser uno de: {valid}") from exc


def _user_role(data):
    raw = data.get('role')
    if raw is None:
        return None
    try:
        return UserRole(raw)
    except ValueError as exc:
        valid = ', '.join(r.value for r in UserRole)
        raise ValidationError(f"'role' debe ser uno de: {valid}") from exc


def _pagination():
    """Lee skip (número de página, desde 1) y limit de la query string."""
    skip = to_int(request.args.get('skip', 1))
    limit = to_int(request.args.get('limit', 10))
    if skip is None or skip < 1:
        raise ValidationError("'skip' debe ser un entero >= 1")
    if limit is None or limit < 1:
        raise ValidationError("'limit' debe ser un entero >= 1")
    return skip, limit


# ═══════════════════════════════════════════════════════════════════════════════
# USUARIOS
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/users', methods=['POST'])
def register():
    data = _json_body()
    user = User(
        name=_required_str(data, 'name'),
        email=_required_str(data, 'email'),
        password=_required_str(data, 'password'),
    )
    user = _container().user_service.register(user)
    return _ok(user.to_public_dict())


@api.route('/users/login', methods=['POST'])
def login():
    data = _json_body()
    token = _container().auth_service.login(
        _required_str(data, 'email'),
        _required_str(data, 'password'),
    )
    return _ok({"token": token})


@api.route('/users', methods=['GET'])
@login_required
def list_users():
    skip, limit = _pagination()
    users = _container().user_service.list_users(skip, limit)
    return _ok([u.to_public_dict() for u in users])


@api.route('/users/<int:user_id>', methods=['GET'])
@login_required
def get_user(user_id):
    return _ok(_container().user_service.get_user(user_id).to_public_dict())


@api.route('/users/<int:user_id>', methods=['PUT'])
@role_required(UserRole.ADMIN)
def update_user(user_id):
    data = _json_body()
    updates = {
        'name': _optional_str(data, 'name'),
        'email': _optional_str(data, 'email'),
        'password': _optional_str(data, 'password'),
        'role': _user_role(data),
    }
    user = _container().user_service.update_user(user_id, updates)
    return _ok(user.to_public_dict())


@api.route('/users/<int:user_id>', methods=['DELETE'])
@role_required(UserRole.ADMIN)
def delete_user(user_id):
    _container().user_service.delete_user(user_id)
    return _ok()


# ═══════════════════════════════════════════════════════════════════════════════
# MÉTODOS DE PAGO
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/payments', methods=['POST'])
@role_required(UserRole.ADMIN)
def create_payment():
    data = _json_body()
    payment = Payment(
        name=_required_str(data, 'name'),
        type=_payment_type(data),
        logo=_optional_str(data, 'logo') or '',
    )
    return _ok(_container().payment_service.create_payment(payment).to_dict())


@api.route('/payments', methods=['GET'])
@login_required
def list_payments():
    skip, limit = _pagination()
    payments = _container().payment_service.list_payments(skip, limit)
    return _ok([p.to_dict() for p in payments])


@api.route('/payments/<int:payment_id>', methods=['GET'])
@login_required
def get_payment(payment_id):
    return _ok(_container().payment_service.get_payment(payment_id).to_dict())


@api.route('/payments/<int:payment_id>', methods=['PUT'])
@role_required(UserRole.ADMIN)
def update_payment(payment_id):
    data = _json_body()
    updates = {
        'name': _optional_str(data, 'name'),
        'type': _payment_type(data, required=False),
        'logo': _optional_str(data, 'logo'),
    }
    payment = _container().payment_service.update_payment(payment_id, updates)
    return _ok(payment.to_dict())


@api.route('/payments/<int:payment_id>', methods=['DELETE'])
@role_required(UserRole.ADMIN)
def delete_payment(payment_id):
    _container().payment_service.delete_payment(payment_id)
    return _ok()


# ═══════════════════════════════════════════════════════════════════════════════
# CATEGORÍAS
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/categories', methods=['POST'])
@role_required(UserRole.ADMIN)
def create_category():
    data = _json_body()
    category = Category(name=_required_str(data, 'name'))
    return _ok(_container().category_service.create_category(category).to_dict())


@api.route('/categories', methods=['GET'])
@login_required
def list_categories():
    skip, limit = _pagination()
    categories = _container().category_service.list_categories(skip, limit)
    return _ok([c.to_dict() for c in categories])


@api.route('/categories/<int:category_id>', methods=['GET'])
@login_required
def get_category(category_id):
    return _ok(_container().category_service.get_category(category_id).to_dict())


@api.route('/categories/<int:category_id>', methods=['PUT'])
@role_required(UserRole.ADMIN)
def update_category(category_id):
    data = _json_body()
    category = _container().category_service.update_category(
        category_id, {'name': _optional_str(data, 'name')}
    )
    return _ok(category.to_dict())


@api.route('/categories/<int:category_id>', methods=['DELETE'])
@role_required(UserRole.ADMIN)
def delete_category(category_id):
    _container().category_service.delete_category(category_id)
    return _ok()


# ═══════════════════════════════════════════════════════════════════════════════
# PRODUCTOS
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/products', methods=['POST'])
@role_required(UserRole.ADMIN)
def create_product():
    data = _json_body()
    product = Product(
        name=_required_str(data, 'name'),
        category_id=_int_field(data, 'category_id', minimum=1),
        price=_money_field(data, 'price'),
        stock=_int_field(data, 'stock'),
        image=_optional_str(data, 'image') or '',
    )
    return _ok(_container().product_service.create_product(product).to_dict())


@api.route('/products', methods=['GET'])
@login_required
def list_products():
    skip, limit = _pagination()
    category_id = None
    if request.args.get('category_id'):
        category_id = _int_field(request.args, 'category_id', minimum=1)
    products = _container().product_service.list_products(
        request.args.get('q', ''), category_id, skip, limit
    )
    return _ok([p.to_dict() for p in products])


@api.route('/products/<int:product_id>', methods=['GET'])
@login_required
def get_product(product_id):
    return _ok(_container().product_service.get_product(product_id).to_dict())


@api.route('/products/<int:product_id>', methods=['PUT'])
@role_required(UserRole.ADMIN)
def update_product(product_id):
    data = _json_body()
    updates = {
        'name': _optional_str(data, 'name'),
        'image': _optional_str(data, 'image'),
        'category_id': _int_field(data, 'category_id', minimum=1, required=False),
        'price': _money_field(data, 'price', required=False),
        'stock': _int_field(data, 'stock', required=False),
    }
    product = _container().product_service.update_product(product_id, updates)
    return _ok(product.to_dict())


@api.route('/products/<int:product_id>', methods=['DELETE'])
@role_required(UserRole.ADMIN)
def delete_product(product_id):
    _container().product_service.delete_product(product_id)
    return _ok()


# ═══════════════════════════════════════════════════════════════════════════════
# ÓRDENES
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/orders', methods=['POST'])
@login_required
def create_order():
    """
    Body:
        {"payment_id": 1, "customer_name": "Ana", "total_paid": 40,
         "products": [{"product_id": 1, "quantity": 3}]}
    """
    data = _json_body()
    lines = data.get('products')
    if not isinstance(lines, list) or not lines:
        raise ValidationError("'products' debe ser una lista no vacía")

    order_products = []
    for line in lines:
        if not isinstance(line, dict):
            raise ValidationError("Cada producto debe ser un objeto")
        order_products.append(OrderProduct(
            product_id=_int_field(line, 'product_id', minimum=1),
            quantity=_int_field(line, 'quantity', minimum=1),
        ))

    order = Order(
        user_id=g.user_id,
        payment_id=_int_field(data, 'payment_id', minimum=1),
        customer_name=_optional_str(data, 'customer_name') or '',
        total_paid=_money_field(data, 'total_paid'),
        products=order_products,
    )
    order = _container().order_service.create_order(order)
    return _ok(order.to_public_dict())


@api.route('/orders', methods=['GET'])
@login_required
def list_orders():
    skip, limit = _pagination()
    orders = _container().order_service.list_orders(skip, limit)
    return _ok([o.to_public_dict() for o in orders])


@api.route('/orders/<int:order_id>', methods=['GET'])
@login_required
def get_order(order_id):
    return _ok(_container().order_service.get_order(order_id).to_public_dict())


# ═══════════════════════════════════════════════════════════════════════════════
# MANEJO DE ERRORES
# ═══════════════════════════════════════════════════════════════════════════════

def _status_for(exc: DomainError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


def handle_domain_error(exc: DomainError):
    status = _status_for(exc)
    if status >= 500:
        current_app.logger.error(
            "Error interno atendiendo %s %s", request.method, request.path, exc_info=exc
        )
        return _error(InternalError.message, status)
    return _error(str(exc), status)


def handle_http_error(exc: HTTPException):
    return _error(exc.description or exc.name, exc.code)


# ═══════════════════════════════════════════════════════════════════════════════
# FÁBRICA DE LA APLICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

def create_app(overrides: dict = None) -> Flask:
    """
    Crea la aplicación Flask.

    Args:
        overrides: Valores para app.config (DATA_DIR, SECRET_KEY,
                   TOKEN_DURATION, ENABLE_PROFILING, ADMIN_*)
    """
    app = Flask(__name__)
    app.config.update(config.as_flask_config())
    app.config['ENABLE_PROFILING'] = ENABLE_PROFILING
    app.config.update(overrides or {})

    container = AppContainer(
        data_dir=app.config['DATA_DIR'],
        secret_key=app.config['SECRET_KEY'],
        token_duration=app.config['TOKEN_DURATION'],
    )
    app.extensions['app_pos'] = container

    app.register_blueprint(api)
    app.register_error_handler(DomainError, handle_domain_error)
    app.register_error_handler(HTTPException, handle_http_error)
    init_profiling(app)

    if app.config.get('ADMIN_EMAIL') and app.config.get('ADMIN_PASSWORD'):
        container.user_service.ensure_admin(
            app.config.get('ADMIN_NAME') or 'Administrador',
            app.config['ADMIN_EMAIL'],
            app.config['ADMIN_PASSWORD'],
        )

    return app


if __name__ == "__main__":
    import os
    # Servidor de desarrollo. En producción usar WSGI (gunicorn wsgi:app)
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    app = create_app()
    print(f"\n{'='*50}")
    print(f"  {config.APP_NAME} en http://{config.HTTP_HOST}:{config.HTTP_PORT}")
    print(f"{'='*50}\n")
    app.run(host=config.HTTP_HOST, port=config.HTTP_PORT, debug=DEBUG)
