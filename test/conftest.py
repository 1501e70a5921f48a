"""
Test Configuration and Fixtures

Environment is set before any application module is imported: settings and
the loguru sinks are built at import time.

Unit tests mock repositories and the payment gateway; no database is needed.
Integration tests run repositories against the PostgreSQL test database, which
is created and migrated once per session. They are skipped when the server
cannot be reached.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['POSTGRES_DB'] = 'fira_marketplace_test_db'
    os.environ['RAZORPAY_KEY_ID'] = 'rzp_test_key'
    os.environ['RAZORPAY_KEY_SECRET'] = 'rzp_test_secret'
    os.environ['EVENT_TIMEZONE'] = 'Asia/Kolkata'


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402
from datetime import date, datetime, timedelta, timezone  # noqa: E402
from typing import Any, Callable  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from uuid_utils.compat import uuid7  # noqa: E402

from fira.platform.app_factory import create_app  # noqa: E402
from fira.platform.config.core_setting import settings  # noqa: E402
from fira.platform.database.orm_db_setting import dispose_engine  # noqa: E402
from fira.service.payment.domain.entity.payment_entity import (  # noqa: E402
    Payment,
    PaymentStatus,
    PaymentType,
)
from fira.service.payment.domain.value_object.payment_reference import (  # noqa: E402
    EventReference,
)
from fira.service.ticketing.domain.entity.event_entity import Event  # noqa: E402
from fira.service.ticketing.domain.entity.ticket_entity import Ticket  # noqa: E402
from fira.service.ticketing.domain.enum.ticket_enum import TicketType  # noqa: E402


ORGANIZER_ID = 10
BUYER_ID = 20
ANOTHER_BUYER_ID = 21


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if item.get_closest_marker('integration') and 'clean_database' not in item.fixturenames:
            item.fixturenames.append('clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
_ROOT = Path(__file__).parent.parent
_cached_tables: list[str] | None = None


async def _reset_test_database() -> None:
    db_url = settings.DATABASE_URL_ASYNC

    # Create database if not exists
    postgres_url = db_url.rsplit('/', 1)[0] + '/postgres'
    engine = create_async_engine(postgres_url, isolation_level='AUTOCOMMIT')
    async with engine.begin() as conn:
        result = await conn.execute(
            text(f"SELECT 1 FROM pg_database WHERE datname = '{settings.POSTGRES_DB}'")
        )
        if not result.fetchone():
            await conn.execute(text(f'CREATE DATABASE {settings.POSTGRES_DB}'))
    await engine.dispose()

    reset_engine = create_async_engine(db_url)
    async with reset_engine.begin() as conn:
        await conn.execute(text('DROP SCHEMA public CASCADE'))
        await conn.execute(text('CREATE SCHEMA public'))
    await reset_engine.dispose()


def _migrate_test_database() -> None:
    # env.py drives its own event loop, so this must run outside one
    alembic_cfg = Config(str(_ROOT / 'alembic.ini'))
    alembic_cfg.set_main_option('script_location', str(_ROOT / 'fira' / 'platform' / 'alembic'))
    command.upgrade(alembic_cfg, 'head')


async def _clean_all_tables() -> None:
    global _cached_tables
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            if _cached_tables is None:
                result = await conn.execute(
                    text(
                        "SELECT tablename FROM pg_tables WHERE schemaname = 'public' "
                        "AND tablename != 'alembic_version'"
                    )
                )
                _cached_tables = [row[0] for row in result]

            if _cached_tables:
                quoted = [f'"{t}"' for t in _cached_tables]
                await conn.execute(text(f'TRUNCATE {", ".join(quoted)} RESTART IDENTITY CASCADE'))
    finally:
        await engine.dispose()


@pytest.fixture(scope='session')
def migrated_database() -> None:
    try:
        asyncio.run(_reset_test_database())
    except (OSError, SQLAlchemyError) as e:
        pytest.skip(f'PostgreSQL test database unavailable: {e}')
    _migrate_test_database()


@pytest_asyncio.fixture
async def clean_database(migrated_database: None) -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield
    # Repositories share one engine bound to this test's event loop
    await dispose_engine()


@pytest.fixture
def app() -> Generator[FastAPI, None, None]:
    """App without lifespan; controller tests override use case dependencies."""
    application = create_app(title_suffix=' (Test)')
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {'X-User-Id': str(BUYER_ID)}


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Persisted-looking event; by default 30 days out, 500 per ticket."""

    def _make(**overrides: Any) -> Event:
        fields: dict[str, Any] = {
            'id': 1,
            'name': 'Neon Nights',
            'description': 'Rooftop DJ set',
            'organizer_id': ORGANIZER_ID,
            'venue_id': 7,
            'event_date': date.today() + timedelta(days=30),
            'start_time': '20:00',
            'end_time': '23:00',
            'ticket_price': 500,
            'max_attendees': 100,
            'current_attendees': 0,
        }
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def make_ticket() -> Callable[..., Ticket]:
    def _make(**overrides: Any) -> Ticket:
        fields: dict[str, Any] = {
            'user_id': BUYER_ID,
            'event_id': 1,
            'ticket_type': TicketType.GENERAL,
            'quantity': 1,
            'unit_price': 500,
            'payment_id': uuid7(),
        }
        fields.update(overrides)
        return Ticket.create(**fields)

    return _make


@pytest.fixture
def make_payment() -> Callable[..., Payment]:
    """Successful ticket payment unless overridden."""

    def _make(**overrides: Any) -> Payment:
        fields: dict[str, Any] = {
            'id': uuid7(),
            'user_id': BUYER_ID,
            'payment_type': PaymentType.TICKET_PURCHASE,
            'reference': EventReference(event_id=1),
            'amount': 500,
            'platform_fee': 25,
            'net_amount': 475,
            'status': PaymentStatus.SUCCESS,
            'gateway_order_id': 'order_test_1',
            'gateway_transaction_id': 'pay_test_1',
            'paid_at': datetime.now(timezone.utc),
        }
        fields.update(overrides)
        return Payment(**fields)

    return _make
