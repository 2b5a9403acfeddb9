from __future__ import annotations
from http import HTTPStatus
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import core_fault

T = TypeVar("T")

def _tx_fault(message: str, cause: BaseException) -> core_fault.Fault:
    return core_fault.new(message, http_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                          tag=core_fault.TRANSACTION, cause=cause)

def exec_tx(session_factory: Callable[[], Session], fn: Callable[[Session], T]) -> T:
    """
    Run ``fn(session)`` inside one transaction and commit.

    Any failure of *fn* rolls back and is re-raised as a ``TRANSACTION``
    Fault carrying the original error; begin, rollback and commit failures
    are reported the same way.
    """
    session = session_factory()
    try:
        try:
            session.begin()
        except SQLAlchemyError as e:
            raise _tx_fault("failed to begin transaction", e) from e

        try:
            result = fn(session)
        except Exception as e:
            try:
                session.rollback()
            except SQLAlchemyError as rb:
                raise _tx_fault("failed to rollback transaction", rb) from rb
            raise _tx_fault("transaction failed", e) from e

        try:
            session.commit()
        except SQLAlchemyError as e:
            raise _tx_fault("failed to commit transaction", e) from e
        return result
    finally:
        session.close()

async def aexec_tx(session_factory: Callable[[], AsyncSession], fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """Async counterpart of :func:`exec_tx` for ``async_sessionmaker``."""
    session = session_factory()
    try:
        try:
            await session.begin()
        except SQLAlchemyError as e:
            raise _tx_fault("failed to begin transaction", e) from e

        try:
            result = await fn(session)
        except Exception as e:
            try:
                await session.rollback()
            except SQLAlchemyError as rb:
                raise _tx_fault("failed to rollback transaction", rb) from rb
            raise _tx_fault("transaction failed", e) from e

        try:
            await session.commit()
        except SQLAlchemyError as e:
            raise _tx_fault("failed to commit transaction", e) from e
        return result
    finally:
        await session.close()

__all__ = ["exec_tx", "aexec_tx"]
