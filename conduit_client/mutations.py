"""Mutation - guarded write action.

Every write (login, favorite, comment, ...) is a Mutation instance:

    invoke(*args)
      ├─ already submitting?  -> ignored: no transport call, returns None
      ├─ precondition fails?  -> ignored (the precondition ran its own effect)
      └─ submitting = True, errors cleared
            await call(*args)
              ├─ success: submitting = False, then each success effect(result)
              └─ failure: submitting = False, ValidationFailed -> errors cell,
                          exception re-raised; never retried
"""

from __future__ import annotations

from typing import Awaitable, Callable, Generic, Optional, Sequence, TypeVar

from conduit_client.errors import ValidationFailed
from conduit_client.protocols import ErrorSet, LoggerProtocol
from conduit_client.state import StateCell
from conduit_client.utils.logging import get_component_logger

R = TypeVar("R")

SuccessEffect = Callable[[R], None]


class Mutation(Generic[R]):
    """One logical write action with an at-most-one-in-flight guard."""

    def __init__(
        self,
        name: str,
        call: Callable[..., Awaitable[R]],
        *,
        on_success: Sequence[SuccessEffect] = (),
        precondition: Optional[Callable[[], bool]] = None,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self.name = name
        self._call = call
        self._on_success = list(on_success)
        self._precondition = precondition
        self._logger = get_component_logger("Mutation", logger).bind(action=name)

        self.submitting: StateCell[bool] = StateCell(False, name=f"{name}.submitting", logger=self._logger)
        self.errors: StateCell[Optional[ErrorSet]] = StateCell(None, name=f"{name}.errors", logger=self._logger)
        self.last_error: Optional[BaseException] = None

    @property
    def in_flight(self) -> bool:
        return self.submitting.value

    def then(self, effect: SuccessEffect) -> "Mutation[R]":
        """Append a success effect; returns self for chaining."""
        self._on_success.append(effect)
        return self

    async def invoke(self, *args, **kwargs) -> Optional[R]:
        """Run the action unless it is already in flight."""
        if self.submitting.value:
            self._logger.debug("mutation_ignored_in_flight")
            return None
        if self._precondition is not None and not self._precondition():
            self._logger.debug("mutation_precondition_failed")
            return None

        self.submitting.set(True)
        self.errors.set(None)
        self.last_error = None
        try:
            result = await self._call(*args, **kwargs)
        except ValidationFailed as e:
            self.last_error = e
            self.errors.set(e.errors)
            self._logger.info("mutation_rejected", status=e.status, fields=sorted(e.errors))
            raise
        except Exception as e:
            self.last_error = e
            self._logger.warning("mutation_failed", error=str(e))
            raise
        finally:
            self.submitting.set(False)

        self._logger.debug("mutation_succeeded")
        for effect in self._on_success:
            effect(result)
        return result

    def __repr__(self) -> str:
        return f"Mutation(name={self.name!r}, in_flight={self.in_flight})"


__all__ = ["Mutation", "SuccessEffect"]
