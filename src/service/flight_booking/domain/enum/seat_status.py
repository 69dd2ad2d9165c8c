"""
Seat occupancy states

available → held (booking creation or standalone hold)
held → occupied (payment confirmed)
held → available (release, expiry sweep, pending booking expired)
occupied → available (confirmed booking cancelled)
"""

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    HELD = 'held'
    OCCUPIED = 'occupied'


class FareClass(StrEnum):
    ECONOMY = 'economy'
    BUSINESS = 'business'
