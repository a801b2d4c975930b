"""
Error taxonomy raised by adapters and the client.

Use cases translate these into ``libs.result.Error`` codes; the API layer
never lets them escape as raw exceptions.
"""


class TaskGateError(Exception):
    code = "ERROR"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class AuthError(TaskGateError):
    """Bad credentials, already-registered email, invalid session"""

    code = "AUTH_ERROR"


class AuthorizationError(TaskGateError):
    """Not admin, self-action, peer-admin protected"""

    code = "FORBIDDEN"


class NotFoundError(TaskGateError):
    code = "NOT_FOUND"


class StoreError(TaskGateError):
    """Generic CRUD failure"""

    code = "STORE_ERROR"


class AdminChannelError(TaskGateError):
    """Privileged identity deletion failed"""

    code = "ADMIN_CHANNEL_ERROR"


class InvalidInputError(TaskGateError):
    code = "INVALID_INPUT"
