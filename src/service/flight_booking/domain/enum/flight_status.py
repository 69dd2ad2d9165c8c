from enum import StrEnum


class FlightStatus(StrEnum):
    SCHEDULED = 'scheduled'
    IN_FLIGHT = 'in_flight'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class RouteType(StrEnum):
    DIRECT = 'direct'
    ONE_STOP = 'one_stop'
    TWO_PLUS_STOPS = 'two_plus_stops'
