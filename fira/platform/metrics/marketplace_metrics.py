from prometheus_client import Counter, Histogram


class MarketplaceMetrics:
    """
    Marketplace business metrics

    Ticket sales, event cancellations and the payment gateway traffic they drive.
    Exposed through the /metrics endpoint.
    """

    def __init__(self) -> None:
        self.tickets_purchased = Counter(
            'fira_tickets_purchased_total',
            'Tickets issued (counted by quantity)',
            ['ticket_type'],
        )

        self.ticket_purchase_rejections = Counter(
            'fira_ticket_purchase_rejections_total',
            'Purchases rejected before a ticket was issued',
            ['reason'],  # capacity / cancelled_event / payment
        )

        self.event_cancellations = Counter(
            'fira_event_cancellations_total',
            'Events cancelled by organizers',
        )

        self.refund_requests = Counter(
            'fira_refund_requests_total',
            'Refund requests sent to the payment gateway',
            ['reason', 'result'],  # result: initiated/failed
        )

        self.payment_verifications = Counter(
            'fira_payment_verifications_total',
            'Payment signature verifications',
            ['result'],  # result: success/signature_mismatch
        )

        self.gateway_request_duration = Histogram(
            'fira_payment_gateway_request_duration_seconds',
            'Payment gateway HTTP call duration',
            ['operation'],
            buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
        )

    # ========== Helper Methods ==========

    def record_ticket_purchase(self, *, ticket_type: str, quantity: int) -> None:
        self.tickets_purchased.labels(ticket_type=ticket_type).inc(quantity)

    def record_purchase_rejection(self, *, reason: str) -> None:
        self.ticket_purchase_rejections.labels(reason=reason).inc()

    def record_refund(self, *, reason: str, result: str) -> None:
        self.refund_requests.labels(reason=reason, result=result).inc()

    def record_payment_verification(self, *, result: str) -> None:
        self.payment_verifications.labels(result=result).inc()

    def observe_gateway_call(self, *, operation: str, duration: float) -> None:
        self.gateway_request_duration.labels(operation=operation).observe(duration)


# Global metrics instance
metrics = MarketplaceMetrics()
