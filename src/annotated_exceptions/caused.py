from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from annotated_exceptions.errors import AnnotatedException


class CausedException(AnnotatedException):
    """An :class:`AnnotatedException` that encapsulates an underlying error.

    The wrapped error is stored as-is. When it is an exception it also
    becomes ``__cause__`` so tracebacks show the chain.
    """

    metadata_keys: ClassVar[tuple[str, ...]] = (
        *AnnotatedException.metadata_keys,
        "error",
    )

    error: BaseException | None = None

    def __init__(
        self,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        /,
        **fields: Any,
    ) -> None:
        super().__init__(message, metadata, **fields)
        if isinstance(self.error, BaseException):
            self.__cause__ = self.error

    def __setstate__(self, state: dict[str, Any]) -> None:
        super().__setstate__(state)
        if isinstance(self.error, BaseException):
            self.__cause__ = self.error

    def set_error(self, error: Any) -> Any:
        """Attach *error*, replacing any previous one."""
        previous = self.error
        self.error = error
        if isinstance(error, BaseException):
            self.__cause__ = error
        elif previous is not None and self.__cause__ is previous:
            self.__cause__ = None
        return error


ErrorException = CausedException
