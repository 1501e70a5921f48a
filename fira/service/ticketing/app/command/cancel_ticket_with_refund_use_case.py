from datetime import datetime, timezone
from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.core_setting import Settings
from fira.platform.config.di import Container
from fira.platform.exception.exceptions import (
    ForbiddenError,
    NotFoundError,
    PaymentGatewayError,
)
from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.command.create_notification_use_case import (
    CreateNotificationUseCase,
)
from fira.service.notification.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from fira.service.notification.domain.entity.notification_entity import NotificationType
from fira.service.payment.app.command.request_refund_use_case import RequestRefundUseCase
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.refund_entity import Refund, RefundReason
from fira.service.ticketing.app.command.cancel_ticket_use_case import CancelTicketUseCase
from fira.service.ticketing.app.dto.ticketing_dto import TicketCancellationResult
from fira.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from fira.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from fira.service.ticketing.app.query.check_refund_eligibility_use_case import (
    refund_policy_from_settings,
)
from fira.service.ticketing.domain.refund_policy import RefundPolicy


class CancelTicketWithRefundUseCase:
    """
    Buyer cancels their own ticket.

    The ticket is always cancelled when it is still active. Money goes back
    only when the refund policy allows it and the ticket was paid for. A
    gateway failure does not undo the cancellation; it is reported in
    `refund_error` and the failed Refund row stays on record.
    """

    def __init__(
        self,
        *,
        ticket_command_repo: ITicketCommandRepo,
        event_command_repo: IEventCommandRepo,
        cancel_ticket: CancelTicketUseCase,
        request_refund: RequestRefundUseCase,
        create_notification: CreateNotificationUseCase,
        refund_policy: RefundPolicy,
    ) -> None:
        self.ticket_command_repo = ticket_command_repo
        self.event_command_repo = event_command_repo
        self.cancel_ticket = cancel_ticket
        self.request_refund = request_refund
        self.create_notification = create_notification
        self.refund_policy = refund_policy

    @classmethod
    @inject
    def depends(
        cls,
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        payment_command_repo: IPaymentCommandRepo = Depends(
            Provide[Container.payment_command_repo]
        ),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        notification_command_repo: INotificationCommandRepo = Depends(
            Provide[Container.notification_command_repo]
        ),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            ticket_command_repo=ticket_command_repo,
            event_command_repo=event_command_repo,
            cancel_ticket=CancelTicketUseCase(
                ticket_command_repo=ticket_command_repo, event_command_repo=event_command_repo
            ),
            request_refund=RequestRefundUseCase(
                payment_command_repo=payment_command_repo, payment_gateway=payment_gateway
            ),
            create_notification=CreateNotificationUseCase(
                notification_command_repo=notification_command_repo
            ),
            refund_policy=refund_policy_from_settings(settings),
        )

    @Logger.io
    async def execute(
        self, *, ticket_id: UUID, user_id: int, reason: str | None = None
    ) -> TicketCancellationResult:
        ticket = await self.ticket_command_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')
        if ticket.user_id != user_id:
            raise ForbiddenError('Unauthorized: This ticket belongs to another user')

        event = await self.event_command_repo.get_by_id(event_id=ticket.event_id)
        if not event:
            raise NotFoundError('Event not found')

        eligibility = self.refund_policy.evaluate(
            ticket=ticket, event=event, now=datetime.now(timezone.utc)
        )
        cancelled = await self.cancel_ticket.execute(ticket_id=ticket_id, reason=reason)

        refund: Refund | None = None
        refund_error: str | None = None
        if eligibility.eligible and eligibility.refund_amount > 0 and ticket.payment_id:
            try:
                refund = await self.request_refund.execute(
                    payment_id=ticket.payment_id,
                    reason=RefundReason.USER_REQUEST,
                    reason_details=reason,
                    amount=eligibility.refund_amount,
                )
            except PaymentGatewayError as e:
                refund_error = e.message

        message = f'Your ticket for "{event.name}" has been cancelled.'
        if refund:
            message += f' A {refund.refund_type} refund of {refund.amount} has been initiated.'
        try:
            await self.create_notification.execute(
                user_id=user_id,
                type=NotificationType.TICKET_CANCELLED,
                title='Ticket Cancelled',
                message=message,
                data={
                    'event_id': event.id,
                    'ticket_id': str(ticket_id),
                    'refund_amount': refund.amount if refund else 0,
                },
            )
        except Exception as e:
            Logger.base.error(f'❌ [CANCEL_TICKET] Notification failed for {ticket_id}: {e}')

        return TicketCancellationResult(
            ticket=cancelled,
            refund_eligibility=eligibility,
            refund=refund,
            refund_error=refund_error,
        )
