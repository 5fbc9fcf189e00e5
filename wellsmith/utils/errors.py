"""Errors raised at the edges of WellSmith.

The numerical core clamps instead of raising. These errors come from the
boundary: strict validation of sections and mud steps, well files and
workflow parameters. Messages name the offending section or step and the
measured-depth interval it covers, so a failed edit can be traced back to
a row of the well's tables.
"""

from typing import Any, Optional


class WellSmithError(Exception):
    """Base exception for WellSmith errors."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize the error.

        Args:
            message: Primary error message.
            suggestion: How the well data could be corrected.
            details: Machine-readable context (field, section name, depths).
        """
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class DataValidationError(WellSmithError):
    """A section or mud step carries a value that strict mode rejects."""


class ParameterError(WellSmithError):
    """Unknown option, e.g. a report kind or section kind."""


class GeometryError(DataValidationError):
    """Section geometry is inconsistent.

    Covers overlapping sections, swapped diameters and pipe larger than
    the hole it sits in.

    Attributes:
        interval: ``(top, bottom)`` MD interval (m) where the problem sits,
            or ``None`` when it is not tied to a depth.
    """

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        interval: Optional[tuple[float, float]] = None,
    ):
        super().__init__(message, suggestion=suggestion, details=details)
        self.interval = interval
        if interval is not None:
            self.details.setdefault("interval", interval)


def describe_interval(top: float, bottom: float) -> str:
    """Human-readable MD interval, e.g. ``'500-2500 m MD'``."""
    return f"{top:g}-{bottom:g} m MD"


def describe_section(kind: str, section: Any) -> str:
    """Label for a section or step in messages.

    Example:
        >>> from wellsmith.objects import PipeSection
        >>> dp = PipeSection(top=0, length=2500, inner_diameter=0.0953, outer_diameter=0.127, name="DP")
        >>> describe_section("Pipe section", dp)
        "Pipe section 'DP' (0-2500 m MD)"
    """
    name = f" '{section.name}'" if getattr(section, "name", "") else ""
    return f"{kind}{name} ({describe_interval(section.top, section.bottom)})"


def format_validation_error(
    message: str,
    expected: Optional[str] = None,
    received: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> str:
    """Join a message with what was expected and received.

    Returns:
        One line per part, e.g. ``"Bad\\nExpected: >= 0, Received: -1"``.
    """
    parts = [message]
    if expected and received:
        parts.append(f"Expected: {expected}, Received: {received}")
    elif expected:
        parts.append(f"Expected: {expected}")
    elif received:
        parts.append(f"Received: {received}")
    if suggestion:
        parts.append(f"Suggestion: {suggestion}")
    return "\n".join(parts)


def format_parameter_error(
    parameter_name: str,
    value: Any,
    valid_values: Optional[list[str]] = None,
    constraint: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> str:
    """Message for an option outside its allowed values."""
    parts = [f"Invalid value for parameter '{parameter_name}': {value}"]
    if valid_values:
        parts.append(f"Valid values: {', '.join(map(str, valid_values))}")
    if constraint:
        parts.append(f"Constraint: {constraint}")
    if suggestion:
        parts.append(f"Suggestion: {suggestion}")
    return "\n".join(parts)


def raise_validation_error(
    message: str,
    expected: Optional[str] = None,
    received: Optional[str] = None,
    suggestion: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
) -> None:
    """Raise DataValidationError with a formatted message.

    Raises:
        DataValidationError: Always.
    """
    error_msg = format_validation_error(message, expected, received, suggestion)
    raise DataValidationError(error_msg, suggestion=suggestion, details=details)


def raise_geometry_error(
    message: str,
    interval: Optional[tuple[float, float]] = None,
    expected: Optional[str] = None,
    received: Optional[str] = None,
    suggestion: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
) -> None:
    """Raise GeometryError, naming the interval when one is given.

    Args:
        message: Primary error message.
        interval: ``(top, bottom)`` MD interval of the problem.
        expected: What was expected (optional).
        received: What was received (optional).
        suggestion: How to fix the geometry (optional).
        details: Extra context attached to the exception (optional).

    Raises:
        GeometryError: Always.
    """
    if interval is not None:
        message = f"{message} at {describe_interval(*interval)}"
    error_msg = format_validation_error(message, expected, received, suggestion)
    raise GeometryError(
        error_msg, suggestion=suggestion, details=details, interval=interval
    )


def raise_parameter_error(
    parameter_name: str,
    value: Any,
    valid_values: Optional[list[str]] = None,
    constraint: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> None:
    """Raise ParameterError for an invalid option.

    Raises:
        ParameterError: Always; ``details['parameter']`` holds the name.
    """
    error_msg = format_parameter_error(
        parameter_name, value, valid_values, constraint, suggestion
    )
    raise ParameterError(
        error_msg, suggestion=suggestion, details={"parameter": parameter_name}
    )
