from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus, PaymentType
from fira.service.payment.domain.entity.refund_entity import (
    Refund,
    RefundReason,
    RefundStatus,
    RefundType,
)
from fira.service.payment.domain.value_object.payment_reference import reference_from_columns
from fira.service.payment.driven_adapter.model.payment_model import PaymentModel, RefundModel


def payment_model_to_entity(model: PaymentModel) -> Payment:
    return Payment(
        id=model.id,
        user_id=model.user_id,
        payment_type=PaymentType(model.payment_type),
        reference=reference_from_columns(
            kind=model.reference_kind, reference_id=model.reference_id
        ),
        amount=model.amount,
        platform_fee=model.platform_fee,
        net_amount=model.net_amount,
        currency=model.currency,
        status=PaymentStatus(model.status),
        payment_method=model.payment_method,
        gateway_order_id=model.gateway_order_id,
        gateway_transaction_id=model.gateway_transaction_id,
        gateway_response=model.gateway_response,
        failure_reason=model.failure_reason,
        paid_at=model.paid_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def payment_entity_to_model(payment: Payment, model: PaymentModel | None = None) -> PaymentModel:
    model = model or PaymentModel(id=payment.id)
    model.user_id = payment.user_id
    model.payment_type = payment.payment_type.value
    model.reference_kind = payment.reference.kind.value
    model.reference_id = payment.reference.reference_id
    model.amount = payment.amount
    model.platform_fee = payment.platform_fee
    model.net_amount = payment.net_amount
    model.currency = payment.currency
    model.status = payment.status.value
    model.payment_method = payment.payment_method
    model.gateway_order_id = payment.gateway_order_id
    model.gateway_transaction_id = payment.gateway_transaction_id
    model.gateway_response = payment.gateway_response
    model.failure_reason = payment.failure_reason
    model.paid_at = payment.paid_at
    return model


def refund_model_to_entity(model: RefundModel) -> Refund:
    return Refund(
        id=model.id,
        payment_id=model.payment_id,
        user_id=model.user_id,
        reason=RefundReason(model.reason),
        reason_details=model.reason_details,
        amount=model.amount,
        refund_type=RefundType(model.refund_type),
        status=RefundStatus(model.status),
        gateway_refund_id=model.gateway_refund_id,
        gateway_response=model.gateway_response,
        failure_reason=model.failure_reason,
        requested_at=model.requested_at,
        processed_at=model.processed_at,
    )


def refund_entity_to_model(refund: Refund, model: RefundModel | None = None) -> RefundModel:
    model = model or RefundModel(id=refund.id)
    model.payment_id = refund.payment_id
    model.user_id = refund.user_id
    model.reason = refund.reason.value
    model.reason_details = refund.reason_details
    model.amount = refund.amount
    model.refund_type = refund.refund_type.value
    model.status = refund.status.value
    model.gateway_refund_id = refund.gateway_refund_id
    model.gateway_response = refund.gateway_response
    model.failure_reason = refund.failure_reason
    if refund.requested_at is not None:
        model.requested_at = refund.requested_at
    model.processed_at = refund.processed_at
    return model
