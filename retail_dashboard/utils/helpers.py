# retail_dashboard/utils/helpers.py
from datetime import date
import logging
import uuid
from typing import Union, Optional

from ..database.repositories.sales_repo import parse_sale_date

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def today_str() -> str:
    """Return today's date as ISO string (YYYY-MM-DD)."""
    return date.today().isoformat()


def new_id() -> str:
    """Collision-resistant identifier for products and sales."""
    return uuid.uuid4().hex


def fmt_money(
    v: NumberLike,
    places: int = 2,
    *,
    strict: bool = False,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format a number as money with thousands separators and a fixed number of decimals.

    Behavior on parse failure:
      - By default returns str(v).
      - If `sentinel` is provided (e.g., "N/A"), returns that sentinel instead.
      - If `strict=True`, raises ValueError.
    """
    try:
        x = float(v)
    except Exception as e:
        _log.debug("fmt_money: failed to parse %r as float: %s", v, e)
        if strict:
            raise ValueError(f"Could not parse {v!r} as a number.") from e
        return str(sentinel) if sentinel is not None else str(v)
    return f"{x:,.{places}f}"


def fmt_date(iso: str, fmt: str = "%d/%m/%Y") -> str:
    """Render an ISO date/datetime for tables; falls back to the raw text."""
    try:
        return parse_sale_date(iso).strftime(fmt)
    except (TypeError, ValueError):
        return str(iso or "")
