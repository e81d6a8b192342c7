import re

# ASCII digits only
_ISBN10 = re.compile(r"[0-9]{9}[0-9X]", re.IGNORECASE)
_ISBN13 = re.compile(r"[0-9]{13}")


def is_valid_isbn(value: str) -> bool:
    """
    Format check for ISBN-10 and ISBN-13. Hyphens are ignored and the
    ISBN-10 check character may be ``X``. Blank input is accepted since
    the field is optional. Check digits are not verified.
    """
    if not (value or "").strip():
        return True
    cleaned = value.replace("-", "")
    return bool(_ISBN10.fullmatch(cleaned) or _ISBN13.fullmatch(cleaned))
