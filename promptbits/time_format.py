"""Formatting the current time, optionally at a fixed UTC offset."""

from __future__ import annotations

import logging
import math
import re
import struct
from datetime import datetime, timedelta, timezone

log = logging.getLogger(__name__)

FORMAT_12HR = "%r"
FORMAT_24HR = "%T"

_DIRECTIVE = re.compile(r"%.")
_EXPANSIONS = {"%r": "%I:%M:%S %p", "%T": "%H:%M:%S"}


class InvalidOffsetError(ValueError):
    """The UTC offset is not a number of hours strictly between -24 and 24."""


def _expand(time_format: str) -> str:
    return _DIRECTIVE.sub(lambda m: _EXPANSIONS.get(m.group(), m.group()), time_format)


def format_time(time_format: str, moment: datetime) -> str:
    """Format ``moment`` with a strftime-style format.

    ``%r`` (12-hour clock with AM/PM) and ``%T`` (24-hour clock) are
    supported on every platform.
    """
    return moment.strftime(_expand(time_format))


def _to_f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _parse_hours(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise InvalidOffsetError("Invalid timezone offset.")
    try:
        return float(text)
    except ValueError:
        raise InvalidOffsetError("Invalid timezone offset.") from None


def create_offset_time_string(
    utc_time: datetime, utc_time_offset: str, time_format: str
) -> str:
    """Format ``utc_time`` shifted to a fixed offset given in (fractional) hours.

    Fractions allow offsets such as ``+9.5`` or ``+5.75``. A naive
    ``utc_time`` is taken to be in UTC. Raises ``InvalidOffsetError`` if the
    offset does not parse or is not strictly between -24 and 24 hours.
    """
    hours = _parse_hours(utc_time_offset)
    if math.isnan(hours) or not -24.0 < hours < 24.0:
        raise InvalidOffsetError("Invalid timezone offset.")

    seconds = int(_to_f32(_to_f32(hours) * 3600.0))
    offset = timezone(timedelta(seconds=seconds))
    log.debug("Target timezone offset is %s", offset)

    if utc_time.tzinfo is None:
        utc_time = utc_time.replace(tzinfo=timezone.utc)
    target = utc_time.astimezone(offset)
    log.debug("Time in target timezone now is %s", target)
    return format_time(time_format, target)


def current_time_string(time_format: str, utc_time_offset: str = "local") -> str:
    """Format the current time.

    ``utc_time_offset`` is ``"local"`` for the local time zone, or a number
    of hours from UTC; an invalid offset falls back to local time.
    """
    log.debug("Time is formatted with: %s", time_format)
    if utc_time_offset != "local":
        try:
            return create_offset_time_string(
                datetime.now(timezone.utc), utc_time_offset, time_format
            )
        except InvalidOffsetError:
            log.warning(
                'Invalid utc_time_offset configuration provided! Falling back to "local".'
            )
    return format_time(time_format, datetime.now().astimezone())