"""An exception that carries several underlying errors."""

from __future__ import annotations

from typing import Iterable


class AggregateError(Exception):
    """Several errors reported together as one."""

    def __init__(self, errlist: Iterable[BaseException]) -> None:
        self._errors = list(errlist)
        super().__init__(*self._errors)

    def __str__(self) -> str:
        if not self._errors:
            return ""
        if len(self._errors) == 1:
            return str(self._errors[0])
        return "[" + ", ".join(str(err) for err in self._errors) + "]"

    def errors(self) -> list[BaseException]:
        """Return the underlying errors in the order they were given."""
        return list(self._errors)


def new_aggregate(errlist: Iterable[BaseException]) -> AggregateError | None:
    """Wrap the errors in an AggregateError, or return None if there are none."""
    errors = list(errlist)
    if not errors:
        return None
    return AggregateError(errors)