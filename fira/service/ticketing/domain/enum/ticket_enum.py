from enum import StrEnum


class EventStatus(StrEnum):
    UPCOMING = 'upcoming'
    ONGOING = 'ongoing'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class TicketStatus(StrEnum):
    ACTIVE = 'active'
    USED = 'used'
    CANCELLED = 'cancelled'


class TicketType(StrEnum):
    GENERAL = 'general'
    VIP = 'vip'
    EARLY_BIRD = 'early_bird'
