from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from fira.platform.logging.loguru_io import Logger
from fira.service.shared_kernel.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from fira.service.ticketing.app.command.cancel_ticket_with_refund_use_case import (
    CancelTicketWithRefundUseCase,
)
from fira.service.ticketing.app.command.purchase_ticket_use_case import PurchaseTicketUseCase
from fira.service.ticketing.app.command.validate_ticket_use_case import ValidateTicketUseCase
from fira.service.ticketing.app.query.check_refund_eligibility_use_case import (
    CheckRefundEligibilityUseCase,
)
from fira.service.ticketing.app.query.list_tickets_use_case import ListTicketsUseCase
from fira.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    CheckoutResponse,
    RefundEligibilityResponse,
    TicketCancellationResponse,
    TicketCancelRequest,
    TicketPurchaseRequest,
    TicketPurchaseResponse,
    TicketRefundResponse,
    TicketResponse,
    TicketValidateRequest,
)


router = APIRouter()


@router.post('/purchase', status_code=status.HTTP_201_CREATED)
@Logger.io
async def purchase_ticket(
    request: TicketPurchaseRequest,
    response: Response,
    user_id: int = Depends(get_current_user_id),
    use_case: PurchaseTicketUseCase = Depends(PurchaseTicketUseCase.depends),
) -> TicketPurchaseResponse:
    """
    Free events issue the ticket at once. Paid events answer 202 with a gateway
    checkout; after paying, the client calls /api/payment/verify and retries
    here with the payment_id.
    """
    result = await use_case.execute(
        user_id=user_id,
        event_id=request.event_id,
        quantity=request.quantity,
        ticket_type=request.ticket_type,
        payment_id=request.payment_id,
    )
    if result.payment_required and result.payment_initiation:
        initiation = result.payment_initiation
        response.status_code = status.HTTP_202_ACCEPTED
        return TicketPurchaseResponse(
            payment_required=True,
            payment=CheckoutResponse(
                payment_id=initiation.payment_id,
                order_id=initiation.gateway_order_id,
                amount=initiation.amount,
                currency=initiation.currency,
                key_id=initiation.key_id,
            ),
        )
    return TicketPurchaseResponse(
        payment_required=False, ticket=TicketResponse.model_validate(result.ticket)
    )


@router.get('/my', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_tickets(
    user_id: int = Depends(get_current_user_id),
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> List[TicketResponse]:
    tickets = await use_case.list_for_user(user_id=user_id)
    return [TicketResponse.model_validate(t) for t in tickets]


@router.get('/{ticket_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_ticket(
    ticket_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.get_ticket(ticket_id=ticket_id, user_id=user_id)
    return TicketResponse.model_validate(ticket)


@router.post('/{ticket_id}/validate', status_code=status.HTTP_200_OK)
@Logger.io
async def validate_ticket(
    ticket_id: UUID,
    request: TicketValidateRequest,
    staff_id: int = Depends(get_current_user_id),
    use_case: ValidateTicketUseCase = Depends(ValidateTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.execute(
        ticket_id=ticket_id, qr_payload=request.qr_payload, checked_in_by=staff_id
    )
    return TicketResponse.model_validate(ticket)


@router.get('/{ticket_id}/refund-eligibility', status_code=status.HTTP_200_OK)
@Logger.io
async def check_refund_eligibility(
    ticket_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: CheckRefundEligibilityUseCase = Depends(CheckRefundEligibilityUseCase.depends),
) -> RefundEligibilityResponse:
    eligibility = await use_case.execute(ticket_id=ticket_id, user_id=user_id)
    return RefundEligibilityResponse.model_validate(eligibility)


@router.post('/{ticket_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_ticket(
    ticket_id: UUID,
    request: TicketCancelRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: CancelTicketWithRefundUseCase = Depends(CancelTicketWithRefundUseCase.depends),
) -> TicketCancellationResponse:
    result = await use_case.execute(ticket_id=ticket_id, user_id=user_id, reason=request.reason)
    return TicketCancellationResponse(
        ticket=TicketResponse.model_validate(result.ticket),
        refund_eligibility=RefundEligibilityResponse.model_validate(result.refund_eligibility),
        refund=TicketRefundResponse.model_validate(result.refund) if result.refund else None,
        refund_error=result.refund_error,
    )
