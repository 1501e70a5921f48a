from typing import Self
from uuid import UUID

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.core_setting import Settings
from fira.platform.config.di import Container
from fira.platform.exception.exceptions import (
    CapacityExceededError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from fira.platform.logging.loguru_io import Logger
from fira.platform.metrics.marketplace_metrics import metrics
from fira.service.payment.app.command.initiate_payment_use_case import InitiatePaymentUseCase
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.payment_entity import PaymentStatus, PaymentType
from fira.service.payment.domain.value_object.payment_reference import EventReference
from fira.service.ticketing.app.dto.ticketing_dto import PurchaseResult
from fira.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from fira.service.ticketing.app.interface.i_qr_code_renderer import IQrCodeRenderer
from fira.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus, TicketType


class PurchaseTicketUseCase:
    """
    Buy tickets for an event.

    Flow:
    1. Paid event without payment: open a gateway checkout and stop
    2. Otherwise check the supplied payment (must be a successful payment for this event)
    3. Reserve seats with one conditional UPDATE (no overselling under concurrency)
    4. Persist the ticket; seats are released again if that fails
    """

    def __init__(
        self,
        *,
        event_command_repo: IEventCommandRepo,
        ticket_command_repo: ITicketCommandRepo,
        payment_command_repo: IPaymentCommandRepo,
        initiate_payment: InitiatePaymentUseCase,
        qr_code_renderer: IQrCodeRenderer,
    ) -> None:
        self.event_command_repo = event_command_repo
        self.ticket_command_repo = ticket_command_repo
        self.payment_command_repo = payment_command_repo
        self.initiate_payment = initiate_payment
        self.qr_code_renderer = qr_code_renderer

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
        qr_code_renderer: IQrCodeRenderer = Depends(Provide[Container.qr_code_renderer]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            event_command_repo=event_command_repo,
            ticket_command_repo=ticket_command_repo,
            payment_command_repo=payment_command_repo,
            initiate_payment=InitiatePaymentUseCase(
                payment_command_repo=payment_command_repo,
                payment_gateway=payment_gateway,
                settings=settings,
            ),
            qr_code_renderer=qr_code_renderer,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: int,
        event_id: int,
        quantity: int = 1,
        ticket_type: TicketType = TicketType.GENERAL,
        payment_id: UUID | None = None,
    ) -> PurchaseResult:
        if quantity < 1:
            raise DomainError('Quantity must be at least 1')

        event = await self.event_command_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        self._ensure_on_sale(event)
        if not event.has_capacity_for(quantity):
            metrics.record_purchase_rejection(reason='capacity')
            raise CapacityExceededError('Not enough tickets available')

        total_price = event.ticket_price * quantity
        if total_price > 0 and payment_id is None:
            initiation = await self.initiate_payment.execute(
                user_id=user_id,
                payment_type=PaymentType.TICKET_PURCHASE,
                reference=EventReference(event_id=event_id),
                amount=total_price,
                notes={'quantity': str(quantity), 'ticket_type': ticket_type.value},
            )
            Logger.base.info(
                f'💳 [PURCHASE] Payment required for event {event_id}: {total_price} '
                f'(order {initiation.gateway_order_id})'
            )
            return PurchaseResult(payment_initiation=initiation)

        if payment_id is not None:
            await self._ensure_payment_settles(
                payment_id=payment_id, user_id=user_id, event_id=event_id, total_price=total_price
            )

        ticket = Ticket.create(
            user_id=user_id,
            event_id=event_id,
            ticket_type=ticket_type,
            quantity=quantity,
            unit_price=event.ticket_price,
            payment_id=payment_id,
        )
        ticket = attrs.evolve(
            ticket, qr_image=await self.qr_code_renderer.render(payload=ticket.qr_payload)
        )

        reserved = await self.event_command_repo.reserve_seats(event_id=event_id, quantity=quantity)
        if reserved is None:
            # Lost the race, or the event was cancelled since it was read
            latest = await self.event_command_repo.get_by_id(event_id=event_id)
            if latest is not None:
                self._ensure_on_sale(latest)
            metrics.record_purchase_rejection(reason='capacity')
            raise CapacityExceededError('Not enough tickets available')

        try:
            ticket = await self.ticket_command_repo.create(ticket=ticket)
        except Exception:
            await self.event_command_repo.release_seats(event_id=event_id, quantity=quantity)
            raise

        metrics.record_ticket_purchase(ticket_type=ticket_type.value, quantity=quantity)
        Logger.base.info(
            f'🎫 [PURCHASE] Ticket {ticket.code} x{quantity} for event {event_id} '
            f'({reserved.current_attendees}/{reserved.max_attendees})'
        )
        return PurchaseResult(ticket=ticket)

    @staticmethod
    def _ensure_on_sale(event: Event) -> None:
        if event.status == EventStatus.CANCELLED:
            metrics.record_purchase_rejection(reason='cancelled_event')
            raise InvalidStateError('Cannot purchase tickets for a cancelled event')
        if event.status == EventStatus.COMPLETED:
            raise InvalidStateError('Event has already completed')

    async def _ensure_payment_settles(
        self, *, payment_id: UUID, user_id: int, event_id: int, total_price: int
    ) -> None:
        payment = await self.payment_command_repo.get_by_id(payment_id=payment_id)
        if not payment:
            raise NotFoundError('Payment not found')
        if payment.user_id != user_id:
            raise ForbiddenError('Payment belongs to another user')
        if payment.status != PaymentStatus.SUCCESS:
            metrics.record_purchase_rejection(reason='payment')
            raise InvalidStateError('Payment has not been completed')
        if payment.reference != EventReference(event_id=event_id):
            raise DomainError('Payment was not made for this event')
        if payment.amount < total_price:
            raise DomainError('Payment amount does not cover the tickets')
        if await self.ticket_command_repo.get_by_payment_id(payment_id=payment_id):
            raise ConflictError('Payment has already been used for a ticket')
