from taskboard.api.security import require_bearer_token
from taskboard.api.validation import ModelStateError, register_error_handlers

__all__ = ["ModelStateError", "register_error_handlers", "require_bearer_token"]
