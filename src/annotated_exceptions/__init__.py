from annotated_exceptions.caused import CausedException, ErrorException
from annotated_exceptions.config import DEVELOPMENT, Settings, is_development_mode
from annotated_exceptions.error_utils import log_and_wrap, wrap_exceptions
from annotated_exceptions.errors import AnnotatedException
from annotated_exceptions.web import (
    BadRequest,
    Conflict,
    Forbidden,
    HttpException,
    InternalServerError,
    NotFound,
    ServiceUnavailable,
    TooManyRequests,
    Unauthorized,
    UnprocessableEntity,
    WebException,
)

# Original name of the base type. Left out of __all__ so star imports keep
# the builtin.
Exception = AnnotatedException

__all__ = [
    "AnnotatedException",
    "BadRequest",
    "CausedException",
    "Conflict",
    "DEVELOPMENT",
    "ErrorException",
    "Forbidden",
    "HttpException",
    "InternalServerError",
    "NotFound",
    "ServiceUnavailable",
    "Settings",
    "TooManyRequests",
    "Unauthorized",
    "UnprocessableEntity",
    "WebException",
    "is_development_mode",
    "log_and_wrap",
    "wrap_exceptions",
]
