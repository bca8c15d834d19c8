"""Planner error taxonomy."""

from typing import Literal

ProviderKind = Literal["extractor", "places", "directions", "weather"]


class PlannerError(Exception):
    """Base exception for planning errors."""

    user_message = "We couldn't build an itinerary right now. Please try again."


class UnresolvableLocation(PlannerError):
    """Raised when an activity's location cannot be matched with enough confidence."""

    def __init__(self, location: str, suggestions: list[str] | None = None) -> None:
        self.location = location
        self.suggestions = suggestions or []
        message = f'Could not find "{location}"'
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)


class ExternalProviderFailure(PlannerError):
    """Failure reported by an external provider."""

    def __init__(self, kind: ProviderKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind} provider failure: {detail}" if detail else f"{kind} provider failure")


class TransientProviderError(ExternalProviderFailure):
    """Provider failure worth one retry (timeouts, 5xx, rate limits)."""


class PermanentProviderError(ExternalProviderFailure):
    """Provider failure that will not go away on retry (bad request, denied key)."""


class ScheduleConflict(PlannerError):
    """Raised when two scheduled stops overlap."""

    def __init__(self, earlier: str, later: str) -> None:
        self.earlier = earlier
        self.later = later
        super().__init__(f'"{earlier}" overlaps "{later}"')


class EmptyPlan(PlannerError):
    """Raised when no activities could be extracted or resolved."""

    user_message = (
        "We couldn't find any activities to plan. "
        "Please describe where you'd like to go and roughly when, "
        'e.g. "Lunch in the North End at noon, then a walk around Beacon Hill".'
    )

    def __init__(self, reason: str = "no activities") -> None:
        self.reason = reason
        super().__init__(reason)


class PlanAborted(PlannerError):
    """Raised when a planning run is cancelled or exceeds its deadline."""

    user_message = "Planning took too long and was stopped. Please try again."

    def __init__(self, reason: Literal["cancelled", "deadline"]) -> None:
        self.reason = reason
        super().__init__(f"plan aborted: {reason}")
