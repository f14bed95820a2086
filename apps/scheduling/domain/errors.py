"""Errors raised by the scheduling domain and its repositories."""

from __future__ import annotations


class SchedulingError(Exception):
    """Base class for every scheduling failure."""


class ScheduleValidationError(SchedulingError):
    """Input rejected before any store interaction.

    ``field`` names the offending attribute when there is one so the API
    layer can key the error like a serializer error.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def as_detail(self) -> dict:
        if self.field:
            return {self.field: [self.message]}
        return {"non_field_errors": [self.message]}


class FacilityNotFound(SchedulingError):
    def __init__(self, facility_id) -> None:
        super().__init__(f"Facility {facility_id} not found")
        self.facility_id = facility_id


class ExceptionNotFound(SchedulingError):
    def __init__(self, exception_id) -> None:
        super().__init__(f"Availability exception {exception_id} not found")
        self.exception_id = exception_id


class StoreError(SchedulingError):
    """The persistent store rejected or failed an operation.

    Never retried here; the underlying message travels with the error.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        detail = f"{message}: {cause}" if cause is not None else message
        super().__init__(detail)
        self.cause = cause


class ScheduleReplaceError(StoreError):
    """Insert failed after the weekly schedule rows were already deleted.

    Outside a transaction this leaves the facility with no schedule rows at
    all, so it is never folded into a generic store failure.
    """

    def __init__(self, facility_id, rows_deleted: int, cause: BaseException | None = None) -> None:
        super().__init__(
            f"Weekly schedule for facility {facility_id} was cleared "
            f"({rows_deleted} rows) but the new schedule could not be written",
            cause,
        )
        self.facility_id = facility_id
        self.rows_deleted = rows_deleted
