# ==============================================================================
# ERRORES DEL DOMINIO
# ==============================================================================
# Vocabulario de errores que los servicios exponen a la capa HTTP.
# Solo NotFound, Conflict y las reglas de negocio son distinguibles;
# cualquier otro fallo de almacenamiento se colapsa en InternalError
# para no filtrar detalles de implementación.
# ==============================================================================


class DomainError(Exception):
    """Clase base de todos los errores del dominio."""

    message = 'Error del dominio'

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class DataNotFoundError(DomainError):
    """La entidad solicitada no existe."""
    message = 'Dato no encontrado'


class ConflictingDataError(DomainError):
    """Violación de unicidad (nombre, email, etc.)."""
    message = 'El dato ya existe'


class InsufficientStockError(DomainError):
    """La cantidad pedida supera el stock del producto."""
    message = 'Stock insuficiente'


class InsufficientPaymentError(DomainError):
    """El monto pagado no cubre el total de la orden."""
    message = 'Pago insuficiente'


class NoUpdatedDataError(DomainError):
    """Actualización vacía o idéntica a lo almacenado."""
    message = 'No hay datos para actualizar'


class InternalError(DomainError):
    """Cualquier otro fallo (almacenamiento, caché, serialización)."""
    message = 'Error interno del servidor'


# ==============================================================================
# ERRORES DE AUTENTICACIÓN
# ==============================================================================

class InvalidCredentialsError(DomainError):
    message = 'Email o contraseña incorrectos'


class InvalidTokenError(DomainError):
    message = 'Token de acceso inválido'


class ExpiredTokenError(DomainError):
    message = 'Token de acceso expirado'


class UnauthorizedError(DomainError):
    message = 'Se requiere autenticación'


class ForbiddenError(DomainError):
    message = 'Permiso denegado'


# ==============================================================================
# ERRORES DE ENTRADA
# ==============================================================================

class ValidationError(DomainError):
    """Cuerpo o parámetros de la petición inválidos."""
    message = 'Datos de entrada inválidos'
