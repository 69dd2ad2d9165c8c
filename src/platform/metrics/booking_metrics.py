from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Flight booking lifecycle metrics

    Counts every seat-state and booking-state transition so conflicts, expired
    holds and late cancellations show up on the /metrics endpoint.
    """

    def __init__(self) -> None:
        self.bookings_created = Counter(
            'flight_bookings_created_total',
            'Pending bookings created',
            ['fare_class'],
        )

        self.booking_transitions = Counter(
            'flight_booking_transitions_total',
            'Booking status transitions',
            ['from_status', 'to_status'],
        )

        self.booking_rejections = Counter(
            'flight_booking_rejections_total',
            'Booking operations rejected by a precondition',
            ['operation', 'reason'],
        )

        self.seat_holds = Counter(
            'flight_seat_holds_total',
            'Seat holds placed',
            ['source'],  # source: booking/standalone
        )

        self.expired_holds_swept = Counter(
            'flight_seat_expired_holds_swept_total',
            'Held seats released by the expiry sweep',
        )

        self.seats_generated = Counter(
            'flight_seats_generated_total',
            'Seats created by lazy seat-map generation',
        )

        self.booking_batch_size = Histogram(
            'flight_booking_batch_size',
            'Seats requested per create-booking call',
            buckets=[1, 2, 3, 4, 6, 9],
        )

    def record_booking_created(self, *, fare_class: str) -> None:
        self.bookings_created.labels(fare_class=fare_class).inc()

    def record_transition(self, *, from_status: str, to_status: str, count: int = 1) -> None:
        self.booking_transitions.labels(from_status=from_status, to_status=to_status).inc(count)

    def record_rejection(self, *, operation: str, reason: str) -> None:
        self.booking_rejections.labels(operation=operation, reason=reason).inc()

    def record_seat_hold(self, *, source: str) -> None:
        self.seat_holds.labels(source=source).inc()

    def record_expired_holds(self, *, count: int) -> None:
        if count:
            self.expired_holds_swept.inc(count)

    def record_seats_generated(self, *, count: int) -> None:
        if count:
            self.seats_generated.inc(count)

    def record_batch_size(self, *, size: int) -> None:
        self.booking_batch_size.observe(size)


# Global metrics instance
metrics = BookingMetrics()
