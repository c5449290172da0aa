class WorkflowError(Exception):
    """Base de los errores del flujo de moderación."""

    status_code = 500
    message = "Error interno"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class NotFoundError(WorkflowError):
    status_code = 404
    message = "Recurso no encontrado"


class DraftAlreadyPublishedError(WorkflowError):
    status_code = 409
    message = "Este draft ya fue publicado"


class AuthorizationError(WorkflowError):
    status_code = 401
    message = "Se requiere acceso de administrador"


class StoreError(WorkflowError):
    # El texto original del error de Firestore solo va al log
    status_code = 502
    message = "No se pudo completar la operación, inténtalo de nuevo"


class IntakeError(StoreError):
    message = "No se pudo guardar el envío"
