from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, ClassVar

from loguru import logger

from annotated_exceptions.config import is_development_mode
from annotated_exceptions.errors import AnnotatedException


class HttpException(AnnotatedException):
    """An :class:`AnnotatedException` for the web.

    Subclasses may declare a default ``status``. An explicit ``status`` in the
    metadata always wins.

    ```
    class PaymentRequired(HttpException):
        status = 402
    ```
    """

    metadata_keys: ClassVar[tuple[str, ...]] = (
        *AnnotatedException.metadata_keys,
        "status",
    )

    status: int | None = None

    def __init__(
        self,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        /,
        **fields: Any,
    ) -> None:
        super().__init__(message, metadata, **fields)
        default = type(self).status
        if default and "status" not in vars(self):
            self.status = default

    @property
    def status_code(self) -> int | None:
        """Alias of :attr:`status` for web frameworks."""
        return self.status

    @status_code.setter
    def status_code(self, value: int | None) -> None:
        self.status = value

    @property
    def reason(self) -> str | None:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return None

    def set_status(self, status: int | None) -> int | None:
        self.status = status
        return status

    def to_response(self, environment: str | None = None) -> dict[str, Any]:
        """Serialize for a client response.

        ``stack`` is kept only in development. *environment* overrides the
        configured deployment mode.
        """
        data = self.serialize()
        if not is_development_mode(environment):
            logger.debug("Redacting stack from {} response", self.name)
            del data["stack"]
        return data


class BadRequest(HttpException):
    status = HTTPStatus.BAD_REQUEST.value


class Unauthorized(HttpException):
    status = HTTPStatus.UNAUTHORIZED.value


class Forbidden(HttpException):
    status = HTTPStatus.FORBIDDEN.value


class NotFound(HttpException):
    status = HTTPStatus.NOT_FOUND.value


class Conflict(HttpException):
    status = HTTPStatus.CONFLICT.value


class UnprocessableEntity(HttpException):
    status = HTTPStatus.UNPROCESSABLE_ENTITY.value


class TooManyRequests(HttpException):
    status = HTTPStatus.TOO_MANY_REQUESTS.value


class InternalServerError(HttpException):
    status = HTTPStatus.INTERNAL_SERVER_ERROR.value


class ServiceUnavailable(HttpException):
    status = HTTPStatus.SERVICE_UNAVAILABLE.value


WebException = HttpException
