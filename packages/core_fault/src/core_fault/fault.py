from __future__ import annotations
from http import HTTPStatus
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from core_fault.tag import Tag, UNTAGGED

__all__ = [
    "FieldError",
    "FaultBody",
    "Fault",
    "new",
    "parse_validation_error",
    "iter_chain",
    "find_fault",
    "get_tag",
    "matches",
]

GENERAL_FIELD = "general"


class FieldError(BaseModel):
    """One invalid input field in a validation failure."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(examples=["email"])
    message: str = Field(examples=["invalid email format"])


class FaultBody(BaseModel):
    """Wire shape of a Fault. Tag and cause are internal and never serialized."""

    status: int = Field(examples=[400])
    message: str = Field(examples=["validation failed"])
    fields: list[FieldError] = Field(default_factory=list)


def _check_http_code(code: int) -> int:
    try:
        return int(HTTPStatus(int(code)))
    except (TypeError, ValueError):
        raise ValueError(f"invalid HTTP status code: {code!r}") from None


def _strip_period(s: str) -> str:
    return s[:-1] if s.endswith(".") else s


def parse_validation_error(err: Union[BaseException, str, None]) -> list[FieldError]:
    """
    Split a ``"field: message; other: message."`` error text into field errors.

    - segments are separated by ``;`` and trimmed; blank segments are skipped
    - a segment is split on its **first** ``:`` into field and message
    - a segment without ``:`` becomes a ``general`` field error
    - a segment whose field or message is empty after trimming is dropped
    - one trailing ``.`` is removed from the message
    Output order follows input order.
    """
    if err is None:
        return []
    text = err if isinstance(err, str) else str(err)
    out: list[FieldError] = []
    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        field, sep, message = segment.partition(":")
        if not sep:
            out.append(FieldError(field=GENERAL_FIELD, message=segment))
            continue
        field, message = field.strip(), message.strip()
        if not field or not message:
            continue
        out.append(FieldError(field=field, message=_strip_period(message)))
    return out


class Fault(Exception):
    """
    Structured application error for HTTP APIs.

    A Fault carries an HTTP status (default 400), a human message, a semantic
    :class:`~core_fault.tag.Tag` (default ``UNTAGGED``), an ordered list of
    field errors and an optional cause. The cause is the standard exception
    chain (``__cause__``), so ``raise Fault(...) from err`` and
    ``Fault(..., cause=err)`` are equivalent.

    Faults are values: the ``with_*`` methods return a configured copy and
    leave the receiver untouched, so chained calls apply left to right and
    the last one wins::

        err = (core_fault.new("payment failed")
               .with_http_code(409)
               .with_tag(core_fault.CONFLICT)
               .with_cause(exc))
    """

    def __init__(
        self,
        message: str,
        *,
        http_code: int = HTTPStatus.BAD_REQUEST,
        tag: Optional[str] = UNTAGGED,
        cause: Optional[BaseException] = None,
        field_errors: Optional[Iterable[FieldError]] = None,
    ) -> None:
        super().__init__(message)
        self._message = str(message)
        self._http_code = _check_http_code(http_code)
        self._tag = Tag(tag) if tag else UNTAGGED
        self._field_errors: tuple[FieldError, ...] = tuple(field_errors or ())
        if cause is not None:
            self.__cause__ = cause

    # ── accessors ────────────────────────────────────────────────────────
    @property
    def message(self) -> str:
        return self._message

    @property
    def http_code(self) -> int:
        return self._http_code

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def field_errors(self) -> tuple[FieldError, ...]:
        return self._field_errors

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    def get_http_code(self) -> int:
        return self._http_code

    def unwrap(self) -> Optional[BaseException]:
        """Next link of the error chain (the wrapped cause), if any."""
        return self.__cause__

    def is_(self, target: object) -> bool:
        """
        True when *target* is a Fault with the same tag.

        Two unrelated Faults never match unless they share a category, so
        ``matches(err, core_fault.not_found(""))`` asks "is this a NOT_FOUND?".
        """
        return isinstance(target, Fault) and self._tag == target._tag

    def __str__(self) -> str:
        cause = self.__cause__
        if cause is not None:
            return f"{self._tag}: {self._message} (caused by: {cause})"
        return f"{self._tag}: {self._message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self._message!r}, http_code={self._http_code}, "
            f"tag={str(self._tag)!r}, fields={len(self._field_errors)})"
        )

    # ── fluent configuration ─────────────────────────────────────────────
    def _replace(self, **changes: Any) -> "Fault":
        params: dict[str, Any] = {
            "http_code": self._http_code,
            "tag": self._tag,
            "cause": self.__cause__,
            "field_errors": self._field_errors,
        }
        params.update(changes)
        return type(self)(self._message, **params)

    def with_http_code(self, code: int) -> "Fault":
        return self._replace(http_code=code)

    def with_tag(self, tag: str) -> "Fault":
        return self._replace(tag=tag)

    def with_cause(self, cause: Optional[BaseException]) -> "Fault":
        # None keeps the current cause
        if cause is None:
            return self
        return self._replace(cause=cause)

    def with_field_errors(self, *errors: FieldError) -> "Fault":
        return self._replace(field_errors=errors)

    def with_validation_error(self, err: Union[BaseException, str, None]) -> "Fault":
        if err is None:
            return self
        return self._replace(field_errors=parse_validation_error(err))

    # ── wire form ────────────────────────────────────────────────────────
    def body(self) -> FaultBody:
        return FaultBody(status=self._http_code, message=self._message, fields=list(self._field_errors))

    def to_dict(self) -> dict[str, Any]:
        return self.body().model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Fault":
        """Rebuild a Fault from its wire form; tag and cause are not carried."""
        body = FaultBody.model_validate(data)
        return cls(body.message, http_code=body.status, field_errors=body.fields)


def new(
    message: str,
    *,
    http_code: int = HTTPStatus.BAD_REQUEST,
    tag: Optional[str] = UNTAGGED,
    cause: Optional[BaseException] = None,
    field_errors: Optional[Sequence[FieldError]] = None,
) -> Fault:
    """New Fault with the given message; HTTP 400 and ``UNTAGGED`` unless set."""
    return Fault(message, http_code=http_code, tag=tag, cause=cause, field_errors=field_errors)


# ── error-chain helpers ──────────────────────────────────────────────────────
def iter_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    """
    Yield *err* and every wrapped cause, outermost first.

    Follows explicit wrapping only (``__cause__`` or an ``unwrap()`` method),
    never the implicit ``__context__``. Cycles terminate the walk.
    """
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        nxt = getattr(err, "__cause__", None)
        if nxt is None:
            unwrap = getattr(err, "unwrap", None)
            nxt = unwrap() if callable(unwrap) else None
        err = nxt


def find_fault(err: Optional[BaseException]) -> Optional[Fault]:
    """First Fault encountered while unwrapping *err*, or None."""
    for e in iter_chain(err):
        if isinstance(e, Fault):
            return e
    return None


def get_tag(err: Optional[BaseException]) -> Tag:
    """
    Tag of the first Fault in the chain (closest to *err*), else ``UNTAGGED``.

        match core_fault.get_tag(err):
            case core_fault.NOT_FOUND: ...
            case core_fault.BAD_REQUEST: ...
    """
    for e in iter_chain(err):
        if isinstance(e, Fault) and e.tag:
            return e.tag
    return UNTAGGED


def matches(err: Optional[BaseException], target: BaseException) -> bool:
    """True when any link of *err*'s chain is *target* or a Fault that ``is_`` it."""
    for e in iter_chain(err):
        if e is target:
            return True
        if isinstance(e, Fault) and e.is_(target):
            return True
    return False
