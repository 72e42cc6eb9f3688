"""Exceptions raised by the weekly reporting engine and its stores."""

from uuid import UUID


class CallPulseError(Exception):
    """Base class for all CallPulse errors."""


class NoDataError(CallPulseError):
    """No completed call analyses exist for the requested SDR week.

    Expected in normal operation (new SDRs, quiet weeks): batch callers
    skip the SDR and carry on.
    """

    def __init__(
        self,
        sdr_id: UUID | None = None,
        week_number: int | None = None,
        year: int | None = None,
    ) -> None:
        self.sdr_id = sdr_id
        self.week_number = week_number
        self.year = year
        if sdr_id is None:
            message = "No analyzed calls found"
        else:
            message = f"No analyzed calls found for SDR {sdr_id} in week {week_number}, {year}"
        super().__init__(message)


class StoreUnavailableError(CallPulseError):
    """The data store could not be read or written."""


class IncompleteAnalysisError(CallPulseError, ValueError):
    """A call analysis lacks one of the six dimension scores."""

    def __init__(self, analysis_id: UUID, dimension: str) -> None:
        self.analysis_id = analysis_id
        self.dimension = dimension
        super().__init__(f"Analysis {analysis_id} has no score for dimension '{dimension}'")


class InvalidTransitionError(CallPulseError, ValueError):
    """A coaching item status change that the workflow does not allow."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move coaching item from '{current}' to '{requested}'")
