"""Interactive collectors for the values a connections query needs."""

import logging
from datetime import date, timedelta
from typing import Callable, Sequence

from rich.console import Console
from rich.prompt import Prompt

from .config import DEFAULT_DAYS
from .errors import ValidationError
from .models import _now

logger = logging.getLogger(__name__)

console = Console(stderr=True)

MAX_SHOWN_CHOICES = 40

Ask = Callable[..., str]
Warn = Callable[[str], None]


def rich_ask(label: str, default: str | None = None, choices: Sequence[str] | None = None) -> str:
    """Prompt through rich. Long choice lists (station names) are accepted but not printed."""
    kwargs = {}
    if default is not None:
        kwargs["default"] = default
    if choices is not None:
        kwargs["choices"] = list(choices)
        kwargs["show_choices"] = len(choices) <= MAX_SHOWN_CHOICES
    return Prompt.ask(label, console=console, **kwargs)


def _warn(message: str) -> None:
    console.print(f"[yellow]{message}[/]")


def parse_time_of_day(text: str) -> str:
    """Parse 'H:M' (extra ':'-separated parts ignored) into a 'HHMM' string."""
    parts = text.strip().split(":")
    if len(parts) < 2:
        raise ValidationError(f"expected HH:MM, got {text!r}")

    if not all(part.isascii() and part.isdigit() for part in parts[:2]):
        raise ValidationError(f"expected HH:MM, got {text!r}")
    hours, minutes = int(parts[0]), int(parts[1])

    if not 0 <= hours <= 23:
        raise ValidationError(f"hours must be between 0 and 23, got {hours}")
    if not 0 <= minutes <= 59:
        raise ValidationError(f"minutes must be between 0 and 59, got {minutes}")

    return f"{hours:02d}{minutes:02d}"


def read_time(
    label: str = "Time (HH:MM)",
    use_now: bool = True,
    ask: Ask = rich_ask,
    warn: Warn = _warn,
) -> str:
    """
    Ask for a time of day until a valid one is given. Returns 'HHMM'.

    Each pass reads one answer and validates it; an invalid answer shows a
    warning and goes back to reading. There is no attempt limit.
    """
    default = _now().strftime("%H:%M") if use_now else None

    while True:
        answer = ask(label, default=default)
        try:
            return parse_time_of_day(answer or "")
        except ValidationError as e:
            logger.debug("Rejected time %r: %s", answer, e)
            warn(f"Invalid time: {e}")


def date_candidates(start: date, days: int = DEFAULT_DAYS) -> list[tuple[str, date]]:
    """`days` consecutive dates from `start`, each paired with its locale label."""
    candidates = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        candidates.append((day.strftime("%a %x"), day))
    return candidates


def read_date(
    label: str = "Date",
    today: date | None = None,
    days: int = DEFAULT_DAYS,
    ask: Ask = rich_ask,
    warn: Warn = _warn,
) -> str:
    """Offer the next `days` dates and return the chosen one as 'DDMMYY'."""
    candidates = dict(date_candidates(today or _now().date(), days))
    labels = list(candidates)

    while True:
        answer = ask(label, default=labels[0], choices=labels)
        if answer in candidates:
            return candidates[answer].strftime("%d%m%y")
        logger.debug("Rejected date %r", answer)
        warn(f"Pick one of the listed dates, e.g. {labels[0]}")


def read_choice(
    label: str,
    choices: Sequence[str],
    default: str | None = None,
    ask: Ask = rich_ask,
    warn: Warn = _warn,
) -> str:
    """Ask until the answer is one of `choices`."""
    if default not in choices:
        default = None

    while True:
        answer = ask(label, default=default, choices=choices)
        if answer in choices:
            return answer
        warn(f"{answer!r} is not a valid choice")
