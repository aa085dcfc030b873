from __future__ import annotations

import inspect
import traceback
from collections.abc import Mapping
from dataclasses import FrozenInstanceError
from typing import Any, ClassVar


def _merge_metadata(
    metadata: Mapping[str, Any] | None, fields: Mapping[str, Any]
) -> dict[str, Any]:
    """Merge keyword *fields* over the positional *metadata* mapping."""
    return {**(metadata or {}), **fields}


def _json_safe(value: Any, seen: set[int]) -> Any:
    if isinstance(value, AnnotatedException):
        if id(value) in seen:
            return {"name": value.name, "message": value.message}
        return value._serialize(seen)
    if isinstance(value, BaseException):
        return {"name": type(value).__name__, "message": str(value)}
    return value


class AnnotatedException(Exception):
    """Base error annotated with structured metadata.

    Attributes:
        message: Human-readable message describing the error.
        name: Name of the concrete exception class.
        label: Optional short label, e.g. for a UI.
        simple: Optional plain-language message for end users.
        code: Optional machine-readable code for monitoring/alerts.
        stack: Call stack captured when the exception was built.

    Optional attributes live on the instance only when they were supplied,
    so ``"label" in exc.metadata`` tells an explicit ``None`` from a missing
    label. Reading a missing one falls back to the class default ``None``.

    ```
    class PaymentDeclined(AnnotatedException): ...

    raise PaymentDeclined(
        "gateway returned 402",
        label="Payment declined",
        simple="Your card was declined",
        code=14,
    )
    ```
    """

    metadata_keys: ClassVar[tuple[str, ...]] = ("label", "simple", "code")
    frozen_fields: ClassVar[frozenset[str]] = frozenset(
        {"message", "name", "label", "simple", "code"}
    )

    label: str | None = None
    simple: str | None = None
    code: str | int | None = None

    def __init__(
        self,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        /,
        **fields: Any,
    ) -> None:
        super().__init__(message)
        supplied = _merge_metadata(metadata, fields)
        self._set("message", message)
        self._set("name", type(self).__name__)
        for key in self.metadata_keys:
            if key in supplied:
                self._set(key, supplied[key])
        self.stack = self._capture_stack()

    def __str__(self) -> str:
        return self.message

    def __setattr__(self, key: str, value: Any) -> None:
        if key in self.frozen_fields:
            raise FrozenInstanceError(f"cannot assign to field {key!r}")
        super().__setattr__(key, value)

    def __delattr__(self, key: str) -> None:
        if key in self.frozen_fields:
            raise FrozenInstanceError(f"cannot delete field {key!r}")
        super().__delattr__(key)

    def __setstate__(self, state: dict[str, Any]) -> None:
        # pickle/copy restore the frozen fields too
        self.__dict__.update(state)

    def _set(self, key: str, value: Any) -> None:
        object.__setattr__(self, key, value)

    def _capture_stack(self) -> str:
        frame = inspect.currentframe()
        if frame is None:
            frames = traceback.format_stack()
        else:
            # skip every frame of this instance's constructor chain
            while frame is not None and frame.f_locals.get("self") is self:
                frame = frame.f_back
            frames = traceback.format_stack(frame) if frame is not None else []
        return (
            "Stack (most recent call last):\n"
            + "".join(frames)
            + f"{self.name}: {self.message}"
        )

    @property
    def metadata(self) -> dict[str, Any]:
        """Optional fields that were actually supplied."""
        return {
            key: value
            for key, value in vars(self).items()
            if key in self.metadata_keys
        }

    def capture_stack(self) -> str:
        """Re-capture :attr:`stack` from the caller's frame."""
        self.stack = self._capture_stack()
        return self.stack

    def set_stack(self, stack: str) -> str:
        self.stack = stack
        return stack

    def serialize(self) -> dict[str, Any]:
        """Snapshot every public attribute plus name, message and stack.

        Wrapped exceptions are reduced to JSON-safe mappings. An exception
        met a second time collapses to its name and message.
        """
        return self._serialize(set())

    def _serialize(self, seen: set[int]) -> dict[str, Any]:
        seen.add(id(self))
        data = {
            key: _json_safe(value, seen)
            for key, value in vars(self).items()
            if not key.startswith("_")
        }
        data["name"] = self.name
        data["message"] = self.message
        data["stack"] = self.stack
        return data
