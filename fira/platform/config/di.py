"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from fira.platform.config.core_setting import Settings
from fira.platform.database.orm_db_setting import Database
from fira.service.notification.driven_adapter.repo.notification_command_repo_impl import (
    NotificationCommandRepoImpl,
)
from fira.service.notification.driven_adapter.repo.notification_query_repo_impl import (
    NotificationQueryRepoImpl,
)
from fira.service.payment.driven_adapter.gateway.razorpay_gateway_impl import RazorpayGatewayImpl
from fira.service.payment.driven_adapter.repo.payment_command_repo_impl import (
    PaymentCommandRepoImpl,
)
from fira.service.payment.driven_adapter.repo.payment_query_repo_impl import PaymentQueryRepoImpl
from fira.service.ticketing.driven_adapter.qr.qr_code_renderer_impl import QrCodeRendererImpl
from fira.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from fira.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from fira.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
    TicketCommandRepoImpl,
)
from fira.service.ticketing.driven_adapter.repo.ticket_query_repo_impl import TicketQueryRepoImpl
from fira.service.venue_booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from fira.service.venue_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from fira.service.venue_booking.driven_adapter.repo.venue_command_repo_impl import (
    VenueCommandRepoImpl,
)
from fira.service.venue_booking.driven_adapter.repo.venue_query_repo_impl import VenueQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine behind a session context manager)
    database = providers.Singleton(Database)

    # Payment gateway (owns the SDK client session, closed in the app lifespan)
    payment_gateway = providers.Singleton(
        RazorpayGatewayImpl,
        key_id=config_service.provided.RAZORPAY_KEY_ID,
        key_secret=config_service.provided.RAZORPAY_KEY_SECRET,
        timeout=config_service.provided.PAYMENT_GATEWAY_TIMEOUT,
    )

    # Repositories (stateless - use session_factory per call)
    payment_command_repo = providers.Singleton(
        PaymentCommandRepoImpl, session_factory=database.provided.session
    )
    payment_query_repo = providers.Singleton(
        PaymentQueryRepoImpl, session_factory=database.provided.session
    )
    notification_command_repo = providers.Singleton(
        NotificationCommandRepoImpl, session_factory=database.provided.session
    )
    notification_query_repo = providers.Singleton(
        NotificationQueryRepoImpl, session_factory=database.provided.session
    )
    event_command_repo = providers.Singleton(
        EventCommandRepoImpl, session_factory=database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    ticket_command_repo = providers.Singleton(
        TicketCommandRepoImpl, session_factory=database.provided.session
    )
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=database.provided.session
    )
    booking_command_repo = providers.Singleton(
        BookingCommandRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    venue_command_repo = providers.Singleton(
        VenueCommandRepoImpl, session_factory=database.provided.session
    )
    venue_query_repo = providers.Singleton(
        VenueQueryRepoImpl, session_factory=database.provided.session
    )

    # Ticket QR images
    qr_code_renderer = providers.Singleton(QrCodeRendererImpl)


container = Container()


async def cleanup() -> None:
    await container.payment_gateway().aclose()
    container.reset_singletons()
