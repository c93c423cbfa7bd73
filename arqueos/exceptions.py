# arqueos/exceptions.py


class AuditValidationError(ValueError):
    """El formulario de arqueo no se puede guardar (mensaje para el usuario)."""


class WorkspaceBusyError(RuntimeError):
    """Hay un guardado o borrado en curso."""


class AuditNotFoundError(LookupError):
    """El arqueo que se quiere editar ya no existe."""
