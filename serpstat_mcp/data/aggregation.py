"""Result aggregation - sums, averages, tiers and frequency tables over result entries."""

import math
from typing import Any, Callable, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from .constants import FIRST_PAGE, SECOND_PAGE, TOP_N, TOP_POSITIONS


# =============================================================================
# Rounding
# =============================================================================

def round_half_up(value: float, digits: int = 2) -> float:
    """Round half away from zero for non-negative values (0.125 -> 0.13).

    Python's round() rounds halves to even (0.125 -> 0.12).
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percentage(count: float, total: float) -> float:
    """Share of ``total`` as a 2-decimal percent, 0.0 when total is 0."""
    if not total:
        return 0.0
    return math.floor(count / total * 10000 + 0.5) / 100


def average(total: float, count: int) -> float:
    """2-decimal average, 0.0 when there is nothing to average."""
    if not count:
        return 0.0
    return round_half_up(total / count)


def average_int(total: float, count: int) -> int:
    """Average rounded half-up to a whole number, 0 when count is 0."""
    if not count:
        return 0
    return int(math.floor(total / count + 0.5))


# =============================================================================
# Frames and numeric columns
# =============================================================================

def to_frame(entries: Any) -> pd.DataFrame:
    """Build a DataFrame from a result array.

    Non-object entries are skipped.

    Raises:
        TypeError: If ``entries`` is not a list
    """
    if not isinstance(entries, list):
        raise TypeError(f"Result entries must be a list, got {type(entries).__name__}")
    records = [entry for entry in entries if isinstance(entry, dict)]
    return pd.DataFrame.from_records(records) if records else pd.DataFrame()


def _as_number(value: Any) -> Any:
    # bool is numeric to pandas but is never a metric here
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.number, str)):
        return value
    return None


def numeric(frame: pd.DataFrame, column: str) -> pd.Series:
    """Numeric values of a column with missing and malformed cells dropped."""
    if column not in frame.columns:
        return pd.Series(dtype=float)
    values = pd.to_numeric(frame[column].map(_as_number), errors="coerce")
    return values.replace([np.inf, -np.inf], np.nan).dropna()


def column_sum(frame: pd.DataFrame, column: str) -> float:
    return float(numeric(frame, column).sum())


def column_int_sum(frame: pd.DataFrame, column: str) -> int:
    return int(numeric(frame, column).sum())


def column_average(frame: pd.DataFrame, column: str) -> float:
    """2-decimal average over the entries that carry the column."""
    values = numeric(frame, column)
    return average(float(values.sum()), len(values))


def count_where(frame: pd.DataFrame, column: str, predicate: Callable[[pd.Series], pd.Series]) -> int:
    """Number of entries whose numeric value satisfies ``predicate``."""
    values = numeric(frame, column)
    if values.empty:
        return 0
    return int(predicate(values).sum())


def text_values(frame: pd.DataFrame, column: str) -> pd.Series:
    """Non-empty string cells of a column, in entry order."""
    if column not in frame.columns:
        return pd.Series(dtype=object)
    values = frame[column]
    return values[values.map(lambda v: isinstance(v, str) and v != "")]


def list_values(frame: pd.DataFrame, column: str) -> pd.Series:
    """Flatten an array-valued column into one string per occurrence."""
    if column not in frame.columns:
        return pd.Series(dtype=object)
    cells = frame[column]
    exploded = cells[cells.map(lambda v: isinstance(v, list))].explode()
    return exploded[exploded.map(lambda v: isinstance(v, str) and v != "")]


# =============================================================================
# Distributions
# =============================================================================

def frequency(values: Iterable[Any]) -> Dict[str, int]:
    """Occurrence counts keyed by value, in first-seen order."""
    series = pd.Series(list(values), dtype=object)
    if series.empty:
        return {}
    counts = series.groupby(series, sort=False).size()
    return {str(key): int(count) for key, count in counts.items()}


def top_n(counts: Dict[str, int], n: int = TOP_N) -> Dict[str, int]:
    """Highest ``n`` counts; ties keep their first-seen order."""
    if not counts:
        return {}
    series = pd.Series(counts)
    ranked = series.sort_values(ascending=False, kind="stable").head(n)
    return {str(key): int(count) for key, count in ranked.items()}


def bucket_counts(frame: pd.DataFrame, column: str, label: str) -> Dict[str, int]:
    """Counts of whole-number values, keyed by ``label`` formatted with the value.

    ``label`` is a format string such as ``"{}_words"``.
    """
    values = numeric(frame, column)
    values = values[values == values.round()]
    return frequency(label.format(int(v)) for v in values)


def position_tiers(frame: pd.DataFrame, column: str = "position") -> Dict[str, int]:
    """Counts per ranking tier; an entry in the top 3 also counts as first page."""
    positions = numeric(frame, column)
    return {
        "top_3": int(positions.between(*TOP_POSITIONS).sum()),
        "first_page": int(positions.between(*FIRST_PAGE).sum()),
        "second_page": int(positions.between(*SECOND_PAGE).sum()),
        "beyond_second_page": int((positions > SECOND_PAGE[1]).sum()),
        "ranked": len(positions),
    }


# =============================================================================
# Pagination
# =============================================================================

def pagination(total: Any, page: int, page_size: int, entries_returned: int) -> Dict[str, Any]:
    """Derive page count, next-page flag and credits billed for one page.

    Args:
        total: Upstream total result count (may be missing)
        page: Current page
        page_size: Requested page size
        entries_returned: Entries on the current page

    Returns:
        ``total_pages``/``has_next_page`` when total is known, and
        ``credits_used_this_request`` (at least 1) always
    """
    info: Dict[str, Any] = {}
    total = _as_number(total)
    if isinstance(total, (int, float, np.number)) and page_size:
        total_pages = int(math.ceil(total / page_size))
        info["total_pages"] = total_pages
        info["has_next_page"] = page < total_pages
    info["credits_used_this_request"] = max(1, entries_returned)
    return info


def as_list(data: Any) -> List[Any]:
    """Upstream ``data`` as a list; anything else is an empty page."""
    return data if isinstance(data, list) else []


def optional_number(value: Any) -> Optional[float]:
    """Scalar metadata as a finite number; numeric strings are parsed, anything else is None."""
    value = _as_number(value)
    if value is None:
        return None
    number = pd.to_numeric(value, errors="coerce")
    return float(number) if math.isfinite(number) else None
