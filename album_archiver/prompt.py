"""
Operator confirmation for archiving an album code.
"""

from datetime import datetime, timezone
from typing import Callable, Optional
from .models import Decision


_ANSWERS = {
    "y": Decision.CONFIRM,
    "n": Decision.SKIP,
    "a": Decision.CONFIRM_ALL,
}


def format_instant(instant: datetime) -> str:
    """Render an instant as UTC with milliseconds, e.g. ``2023-06-01T00:00:00.000Z``."""
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def parse_decision(answer: str) -> Optional[Decision]:
    """Map an operator answer to a decision; None when it is not y, n or A."""
    return _ANSWERS.get(answer.strip().lower())


def ask_operator(
    before_count: int,
    threshold: datetime,
    input_func: Callable[[str], str] = input
) -> Optional[Decision]:
    """Ask whether to archive the links linked before the threshold."""
    answer = input_func(
        f"Archive {before_count} images before {format_instant(threshold)}? "
        f"(y = yes, n = no, A = archive all): "
    )
    return parse_decision(answer)
