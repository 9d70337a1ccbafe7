from datetime import datetime
from typing import Optional, Union

import pytz


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def to_iso_millis(moment: datetime) -> str:
    """
    밀리초 단위 ISO-8601 UTC 문자열

    예: 2024-05-01T09:30:00.123Z
    """
    utc_moment = moment.astimezone(pytz.utc)
    return utc_moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_moment.microsecond // 1000:03d}Z"


def to_epoch_millis(moment: datetime) -> int:
    # to_iso_millis 와 같은 밀리초 값이 되도록 microsecond 를 직접 사용
    return int(moment.timestamp()) * 1000 + moment.microsecond // 1000


def parse_timestamp(value: Union[str, int, float, None]) -> Optional[datetime]:
    """App Server 가 내려주는 시각(ISO 문자열 또는 epoch ms)을 UTC datetime 으로 변환"""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=pytz.utc)
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = pytz.utc.localize(parsed)
    return parsed


def format_duration(ms: Union[int, float]) -> str:
    """
    밀리초를 사람이 읽기 쉬운 형식으로 변환

    예: 3723000 -> "1h 2m 3s", 65000 -> "1m 5s", 999 -> "0s"
    """
    seconds = int(max(ms, 0) // 1000)
    minutes = seconds // 60
    hours = minutes // 60

    if hours > 0:
        return f"{hours}h {minutes % 60}m {seconds % 60}s"
    elif minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    else:
        return f"{seconds}s"


def elapsed_ms(start: datetime, end: Optional[datetime] = None) -> float:
    end = end or utc_now()
    return (end - start).total_seconds() * 1000
