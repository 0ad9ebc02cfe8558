from prometheus_client import Counter, Gauge, Histogram


class MarketplaceMetrics:
    """
    Marketplace Core Metrics Collector

    Tracks reservation outcomes, inventory contention and the order lifecycle
    """

    def __init__(self):
        # ========== Inventory Metrics ==========
        self.reservation_requests = Counter(
            'ticket_reservation_requests_total',
            'Total ticket reservation requests',
            ['event_id', 'result'],  # result: success/insufficient/busy/not_eligible
        )

        self.reservation_duration = Histogram(
            'ticket_reservation_duration_seconds',
            'Ticket reservation processing time',
            ['event_id'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0],
        )

        self.tickets_available = Gauge(
            'tickets_available',
            'Available tickets per event',
            ['event_id'],
        )

        self.tickets_released = Counter(
            'tickets_released_total',
            'Tickets returned to inventory',
            ['event_id', 'reason'],  # reason: expired/cancelled/refunded
        )

        # ========== Order Lifecycle Metrics ==========
        self.order_transitions = Counter(
            'order_transitions_total',
            'Order state transitions',
            ['status'],
        )

        self.refund_amount = Counter(
            'refund_amount_total',
            'Refunded money in major currency units',
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, event_id: str, result: str, duration: float) -> None:
        self.reservation_requests.labels(event_id=event_id, result=result).inc()
        self.reservation_duration.labels(event_id=event_id).observe(duration)

    def update_availability(self, *, event_id: str, available: int) -> None:
        self.tickets_available.labels(event_id=event_id).set(available)

    def record_release(self, *, event_id: str, reason: str, quantity: int) -> None:
        self.tickets_released.labels(event_id=event_id, reason=reason).inc(quantity)

    def record_transition(self, *, status: str) -> None:
        self.order_transitions.labels(status=status).inc()

    def record_refund(self, *, amount: float) -> None:
        self.refund_amount.inc(amount)


# Global metrics instance
metrics = MarketplaceMetrics()
