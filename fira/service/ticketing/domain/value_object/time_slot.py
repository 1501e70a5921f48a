import re

import attrs

from fira.platform.exception.exceptions import DomainError


_HH_MM = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')


def parse_hh_mm(value: str) -> int:
    """'18:30' -> minutes since midnight."""
    match = _HH_MM.match(value)
    if not match:
        raise DomainError(f'Invalid time "{value}", expected HH:MM')
    return int(match.group(1)) * 60 + int(match.group(2))


@attrs.frozen
class TimeSlot:
    start_time: str
    end_time: str

    @property
    def start_minutes(self) -> int:
        return parse_hh_mm(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_hh_mm(self.end_time)

    def validate(self) -> None:
        if self.end_minutes <= self.start_minutes:
            raise DomainError('End time must be after start time')

    def overlaps(self, other: 'TimeSlot') -> bool:
        # Touching slots (18:00-20:00 and 20:00-22:00) do not overlap
        return self.start_minutes < other.end_minutes and self.end_minutes > other.start_minutes
