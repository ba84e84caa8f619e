# workforce_api/common/parsing.py
from __future__ import annotations

from datetime import datetime, date, timezone
from typing import Optional, Any

from workforce_api.common.errors import ValidationError

_DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y")
_DT_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
)


def utcnow() -> datetime:
    """Naive UTC timestamp; every DateTime column stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def parse_date(s: Any) -> Optional[date]:
    if not s:
        return None
    if isinstance(s, datetime):
        return s.date()
    if isinstance(s, date):
        return s
    s = str(s).strip()
    # accept full timestamps too ("2023-10-05T17:00:00Z")
    if len(s) > 10 and s[10] in ("T", " "):
        ts = parse_ts(s)
        return ts.date() if ts else None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            pass
    return None


def parse_ts(s: Any) -> Optional[datetime]:
    if not s:
        return None
    if isinstance(s, datetime):
        return s
    s = str(s).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s.replace(" ", "T"))
    except ValueError:
        dt = None
        for fmt in _DT_FORMATS:
            try:
                dt = datetime.strptime(s, fmt)
                break
            except ValueError:
                pass
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def iso_ts(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() + "Z" if dt else None


def iso_date(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d else None


def pick(d: dict, *keys, default=None):
    """First present key wins; lets bodies use camelCase or snake_case."""
    for k in keys:
        if k in d:
            return d[k]
    return default


def as_int(v) -> Optional[int]:
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def as_str(v, field: str, required: bool = False) -> Optional[str]:
    """Stripped text, None when blank; any non-string value is a 422."""
    if v is None:
        text = ""
    elif isinstance(v, str):
        text = v.strip()
    else:
        raise ValidationError(f"{field} must be a string", code=f"validation.{field}")
    if required and not text:
        raise ValidationError(f"{field} is required", code=f"validation.{field}")
    return text or None
