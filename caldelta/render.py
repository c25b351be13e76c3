"""Human-readable rendering of interval breakdowns."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, TypeAlias, get_args

from caldelta.instant import Instant
from caldelta.interval import COMPONENT_UNITS, DurationComponents, decompose

if TYPE_CHECKING:
    from caldelta.config import Settings

logger = logging.getLogger(__name__)

Verbosity: TypeAlias = Literal["compact", "standard", "verbose"]

DEFAULT_VERBOSITY: Verbosity = "standard"
DEFAULT_MAX_UNITS = 3

_ABBREVIATIONS = {
    "years": "y",
    "months": "mo",
    "days": "d",
    "hours": "h",
    "minutes": "m",
    "seconds": "s",
}


@dataclass(frozen=True)
class RenderSpec:
    verbosity: Verbosity = DEFAULT_VERBOSITY
    max_units: int = DEFAULT_MAX_UNITS

    def __post_init__(self) -> None:
        if self.verbosity not in get_args(Verbosity):
            valid = ", ".join(get_args(Verbosity))
            raise ValueError(
                f"Invalid verbosity '{self.verbosity}'. Valid values: {valid}"
            )


def select_units(components: DurationComponents, max_units: int) -> list[str]:
    """Pick the units to display: non-zero ones in priority order, capped.

    A non-positive `max_units` keeps every non-zero unit. A zero duration
    selects only ``seconds``.
    """
    chosen = [unit for unit in COMPONENT_UNITS if getattr(components, unit) > 0]
    if not chosen:
        return ["seconds"]
    return chosen[:max_units] if max_units > 0 else chosen


def _word(count: int, unit: str) -> str:
    return f"{count} {unit if count != 1 else unit[:-1]}"


def render(components: DurationComponents, spec: RenderSpec = RenderSpec()) -> str:
    """Render `components` as text.

    Examples (1 day, 1 hour, 2 minutes, 3 seconds):
        compact, 2 units   ->  "1d 1h"
        standard, 3 units  ->  "1 day, 1 hour, 2 minutes"
        verbose, all units ->  "1 day, 1 hour, 2 minutes and 3 seconds"

    Reversed intervals get a leading "-"; a zero duration never does.
    """
    units = select_units(components, spec.max_units)
    counts = [(getattr(components, unit), unit) for unit in units]

    if spec.verbosity == "compact":
        text = " ".join(f"{n}{_ABBREVIATIONS[unit]}" for n, unit in counts)
    else:
        words = [_word(n, unit) for n, unit in counts]
        if spec.verbosity == "verbose" and len(words) > 1:
            text = ", ".join(words[:-1]) + " and " + words[-1]
        else:
            text = ", ".join(words)

    if components.negative and not components.is_zero:
        return f"-{text}"
    return text


def format_duration(
    a: Instant,
    b: Instant,
    verbosity: Verbosity | None = None,
    max_units: int | None = None,
    settings: "Settings | None" = None,
) -> str:
    """Decompose the interval from `a` to `b` and render it.

    Missing `verbosity` / `max_units` come from `settings` when given, else the
    module defaults (standard, 3 units).
    """
    if verbosity is None:
        verbosity = settings.duration_format if settings else DEFAULT_VERBOSITY
    if max_units is None:
        max_units = settings.max_duration_units if settings else DEFAULT_MAX_UNITS
    logger.debug("format_duration verbosity=%s max_units=%s", verbosity, max_units)
    return render(decompose(a, b), RenderSpec(verbosity, max_units))
