# badge_api/core/layout.py
import logging
import math
import re
from typing import NamedTuple

logger = logging.getLogger("badge_api.layout")

DEFAULT_MAX_CHARS_LINE1 = 15
DEFAULT_MAX_CHARS_LINE2 = 15
TRUNCATION_MARKER = "."

_WHITESPACE_RE = re.compile(r"\s+")


class TextPlan(NamedTuple):
    line1: str
    line2: str = ""


def coerce_cap(value, default: int) -> int:
    """Turn a user supplied character cap into a positive int.

    Missing, non-numeric and non-finite values fall back to ``default``;
    fractions are floored and the result is never below 1.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = float(default)
    if not math.isfinite(number):
        number = float(default)
    return max(1, math.floor(number))


# -----------------------------------------------------
# 🔹 Truncation
# -----------------------------------------------------
def truncate_to_max_chars(text: str, max_chars) -> str:
    try:
        limit = float(max_chars)
    except (TypeError, ValueError):
        limit = 0
    if not math.isfinite(limit) or limit <= 0:
        return ""
    limit = math.floor(limit)
    if limit == 0 or not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + TRUNCATION_MARKER


# -----------------------------------------------------
# 🔹 Name splitting
# -----------------------------------------------------
def split_name_into_two_lines(name: str, max_line1=None, max_line2=None) -> TextPlan:
    """Split a display name into at most two lines balanced by length.

    Every split point between words is a candidate. Candidates where both
    halves fit their caps are ranked by the length difference of the halves,
    earliest split first on ties. When no candidate fits, words are packed
    greedily into line 1, the rest spill into line 2, and both lines are
    truncated to their caps.
    """
    if not name or not name.strip():
        return TextPlan("", "")

    max1 = coerce_cap(max_line1, DEFAULT_MAX_CHARS_LINE1)
    max2 = coerce_cap(max_line2, DEFAULT_MAX_CHARS_LINE2)
    words = _WHITESPACE_RE.split(name.strip())

    if len(words) == 1:
        plan = TextPlan(truncate_to_max_chars(words[0], max1), "")
        logger.debug("Single word plan for %r: %s", name, plan)
        return plan

    candidates = []
    for i in range(1, len(words)):
        l1 = " ".join(words[:i])
        l2 = " ".join(words[i:])
        candidates.append((abs(len(l1) - len(l2)), l1, l2))

    valid = [c for c in candidates if len(c[1]) <= max1 and len(c[2]) <= max2]
    if valid:
        _, l1, l2 = min(valid, key=lambda c: c[0])
        plan = TextPlan(l1, l2)
        logger.debug("Balanced plan for %r (caps %d/%d): %s", name, max1, max2, plan)
        return plan

    line1 = ""
    line2 = ""
    for word in words:
        attempt = f"{line1} {word}" if line1 else word
        if len(attempt) <= max1:
            line1 = attempt
        else:
            line2 = f"{line2} {word}" if line2 else word

    plan = TextPlan(
        truncate_to_max_chars(line1 or words[0], max1),
        truncate_to_max_chars(line2, max2),
    )
    logger.debug("Fallback plan for %r (caps %d/%d): %s", name, max1, max2, plan)
    return plan
