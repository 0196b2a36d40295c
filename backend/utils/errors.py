# backend/utils/errors.py
# Domain errors raised by the services and rendered as {"error": message}
# by the handlers registered in main.py.


class AppError(Exception):
    status_code = 500
    default_message = "Error interno del servidor"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# --- 400: bad input ---
class ValidationError(AppError):
    status_code = 400
    default_message = "Datos inválidos"


class InvalidOrderInput(ValidationError):
    default_message = "Datos del pedido inválidos"


# --- 404 ---
class NotFoundError(AppError):
    status_code = 404
    default_message = "Recurso no encontrado"


# --- 401: bad credentials ---
class UnauthorizedError(AppError):
    status_code = 401
    default_message = "No autorizado"


class InvalidCredentials(UnauthorizedError):
    default_message = "Credenciales inválidas"


# --- Conflicts are answered with 400, as the storefront always did ---
class ConflictError(AppError):
    status_code = 400
    default_message = "Conflicto con el estado actual"


class EmailTaken(ConflictError):
    default_message = "El email ya está registrado"


class InsufficientStock(ConflictError):
    default_message = "Stock insuficiente"


# --- 500 ---
class InternalFailure(AppError):
    status_code = 500


class OrderCreationFailed(InternalFailure):
    default_message = "Error creando el pedido"
