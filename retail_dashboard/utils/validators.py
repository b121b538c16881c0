# retail_dashboard/utils/validators.py

def non_empty(text: str) -> bool:
    """
    True if `text` is not None/empty after stripping whitespace.
    """
    return bool(text and str(text).strip())


# ---- Numeric parsing & validators ----

def try_parse_float(x):
    """
    Best-effort parse to float.

    Returns:
        (ok: bool, value: float|None)
    """
    try:
        return True, float(x)
    except Exception:
        return False, None


def try_parse_int(x):
    """
    Parse to int, accepting integral floats/strings like "3" or "3.0".

    Returns:
        (ok: bool, value: int|None)
    """
    ok, val = try_parse_float(x)
    if not ok or val is None or val != val or val in (float("inf"), float("-inf")):
        return False, None
    if not float(val).is_integer():
        return False, None
    return True, int(val)


def is_non_negative_number(x) -> bool:
    """
    True iff x parses to a float and value >= 0.
    """
    ok, val = try_parse_float(x)
    return bool(ok and val is not None and val >= 0)


