from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import ForbiddenError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.platform.metrics.marketplace_metrics import metrics
from fira.service.notification.app.command.create_notification_use_case import (
    CreateNotificationUseCase,
)
from fira.service.notification.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from fira.service.notification.domain.entity.notification_entity import (
    NotificationPriority,
    NotificationType,
)
from fira.service.payment.app.command.request_refund_use_case import RequestRefundUseCase
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.refund_entity import RefundReason
from fira.service.ticketing.app.dto.ticketing_dto import (
    CancellationSummary,
    EventCancellationResult,
)
from fira.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from fira.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket


DEFAULT_CANCELLATION_REASON = 'Event cancelled by organizer'


class CancelEventUseCase:
    """
    Organizer cancels an event.

    Every active ticket is cancelled, refunded when it was paid for, and its
    holder notified. Tickets are handled one at a time, each in its own error
    boundary: a failing refund or notification is counted in the summary and
    never aborts the batch. The event itself is always marked cancelled at the
    end, with its attendee counter zeroed.

    There is no transaction around the batch; a concurrent reader can see a
    partially cancelled set of tickets. Active tickets are listed again after
    the event is marked cancelled, which picks up purchases that committed
    during the batch. A purchase that reserved its seats before the event was
    marked cancelled but writes its ticket after that second listing is not
    picked up.
    """

    def __init__(
        self,
        *,
        event_command_repo: IEventCommandRepo,
        ticket_command_repo: ITicketCommandRepo,
        request_refund: RequestRefundUseCase,
        create_notification: CreateNotificationUseCase,
    ) -> None:
        self.event_command_repo = event_command_repo
        self.ticket_command_repo = ticket_command_repo
        self.request_refund = request_refund
        self.create_notification = create_notification

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
        payment_command_repo: IPaymentCommandRepo = Depends(
            Provide[Container.payment_command_repo]
        ),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        notification_command_repo: INotificationCommandRepo = Depends(
            Provide[Container.notification_command_repo]
        ),
    ) -> Self:
        return cls(
            event_command_repo=event_command_repo,
            ticket_command_repo=ticket_command_repo,
            request_refund=RequestRefundUseCase(
                payment_command_repo=payment_command_repo, payment_gateway=payment_gateway
            ),
            create_notification=CreateNotificationUseCase(
                notification_command_repo=notification_command_repo
            ),
        )

    @Logger.io
    async def execute(
        self, *, event_id: int, reason: str | None = None, organizer_id: int | None = None
    ) -> EventCancellationResult:
        """
        Raises:
            NotFoundError: unknown event
            ForbiddenError: organizer_id given and not the event's organizer
            AlreadyCancelledError: event was cancelled before; nothing is written
        """
        event = await self.event_command_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        if organizer_id is not None and event.organizer_id != organizer_id:
            raise ForbiddenError('Only the organizer can cancel this event')

        cancellation_reason = reason or DEFAULT_CANCELLATION_REASON
        cancelled_event = event.cancel(reason=cancellation_reason)

        tickets = await self.ticket_command_repo.list_active_by_event(event_id=event_id)
        summary = CancellationSummary(total_tickets=len(tickets))
        Logger.base.info(
            f'🛑 [CANCEL_EVENT] Cancelling event {event_id} with {len(tickets)} active tickets'
        )

        for ticket in tickets:
            await self._cancel_ticket(
                event=event, ticket=ticket, reason=cancellation_reason, summary=summary
            )

        cancelled_event = await self.event_command_repo.save_cancellation(event=cancelled_event)
        metrics.event_cancellations.inc()

        # Purchases that committed while the batch ran. Once the event is
        # cancelled reserve_seats refuses new ones, so one more sweep is enough.
        handled = {ticket.id for ticket in tickets}
        late_tickets = [
            ticket
            for ticket in await self.ticket_command_repo.list_active_by_event(event_id=event_id)
            if ticket.id not in handled
        ]
        if late_tickets:
            Logger.base.warning(
                f'⚠️ [CANCEL_EVENT] {len(late_tickets)} tickets for event {event_id} '
                f'were bought during cancellation'
            )
            summary.total_tickets += len(late_tickets)
            for ticket in late_tickets:
                await self._cancel_ticket(
                    event=event, ticket=ticket, reason=cancellation_reason, summary=summary
                )

        Logger.base.info(
            f'✅ [CANCEL_EVENT] Event {event_id} cancelled: '
            f'{summary.refunds_initiated} refunds initiated, {summary.refunds_failed} failed, '
            f'total {summary.total_refund_amount}'
        )
        return EventCancellationResult(event=cancelled_event, refund_results=summary)

    async def _cancel_ticket(
        self, *, event: Event, ticket: Ticket, reason: str, summary: CancellationSummary
    ) -> None:
        try:
            cancelled = await self.ticket_command_repo.update_if_active(
                ticket=ticket.cancel(reason=reason)
            )
        except Exception as e:
            summary.failed_ticket_ids.append(ticket.id)
            if ticket.payment_id:
                summary.refunds_failed += 1
            Logger.base.error(f'❌ [CANCEL_EVENT] Could not cancel ticket {ticket.id}: {e}')
            return
        if cancelled is None:
            # Cancelled or checked in by another request, which owns its refund
            Logger.base.info(f'⏭️ [CANCEL_EVENT] Ticket {ticket.id} is no longer active')
            return
        ticket = cancelled

        refund_status = 'none'
        if ticket.payment_id:
            try:
                await self.request_refund.execute(
                    payment_id=ticket.payment_id,
                    reason=RefundReason.EVENT_CANCELLED,
                    reason_details=reason,
                    amount=ticket.price,
                )
                summary.refunds_initiated += 1
                summary.total_refund_amount += ticket.price
                refund_status = 'initiated'
            except Exception as e:
                summary.refunds_failed += 1
                summary.failed_ticket_ids.append(ticket.id)
                refund_status = 'failed'
                Logger.base.error(f'❌ [CANCEL_EVENT] Refund failed for ticket {ticket.id}: {e}')

        message = f'The event "{event.name}" has been cancelled.'
        if ticket.price > 0:
            message += ' A refund has been initiated for your ticket.'
        try:
            await self.create_notification.execute(
                user_id=ticket.user_id,
                type=NotificationType.EVENT_CANCELLED,
                title='Event Cancelled',
                message=message,
                data={
                    'event_id': event.id,
                    'ticket_id': str(ticket.id),
                    'refund_amount': ticket.price,
                    'refund_status': refund_status,
                },
                priority=NotificationPriority.HIGH,
            )
        except Exception as e:
            summary.notifications_failed += 1
            Logger.base.error(f'❌ [CANCEL_EVENT] Notification failed for ticket {ticket.id}: {e}')
