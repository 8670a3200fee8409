"""
Exceptions raised and collected by the writer.
"""

from collections.abc import Iterator


class WriterError(Exception):
    """Base exception for writer errors."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class RecordLengthError(WriterError, IndexError):
    """Record does not have one value per column."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"record has {actual} values, expected {expected} (one per column)")
        self.expected = expected
        self.actual = actual


class SinkError(WriterError):
    """The underlying sink rejected a write or flush."""

    pass


class MultiError(WriterError):
    """
    Append-only collection of errors.

    Writers keep one of these and add to it whenever a write or flush fails.
    Nothing is ever removed, so the aggregate only grows over the lifetime
    of the writer.

    Usage:
        err = None
        err = MultiError.append(err, WriterError("error flushing csv: disk full"))
        if err:
            print(err)  # 1 error occurred: ...
    """

    def __init__(self, errors: list[BaseException] | None = None) -> None:
        self._errors: list[BaseException] = list(errors or [])
        super().__init__(self._render())

    @classmethod
    def append(cls, existing: "MultiError | None", *errors: BaseException) -> "MultiError":
        """
        Add errors to an aggregate, creating it when there is none yet.

        Args:
            existing: Current aggregate or None
            *errors: Errors to add (nested MultiErrors are flattened)

        Returns:
            The aggregate holding all errors
        """
        aggregate = existing if existing is not None else cls()
        for err in errors:
            if isinstance(err, MultiError):
                aggregate._errors.extend(err.errors)
            else:
                aggregate._errors.append(err)
        aggregate.message = aggregate._render()
        aggregate.args = (aggregate.message,)
        return aggregate

    @property
    def errors(self) -> tuple[BaseException, ...]:
        """Errors in the order they were recorded."""
        return tuple(self._errors)

    def _render(self) -> str:
        if not self._errors:
            return "0 errors occurred"
        noun = "error" if len(self._errors) == 1 else "errors"
        points = "\n".join(f"\t* {err}" for err in self._errors)
        return f"{len(self._errors)} {noun} occurred:\n{points}"

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)
