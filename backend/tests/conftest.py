"""Shared test configuration and fixtures for backend tests.

Key principles:
- Each test gets its own file-backed SQLite database (aiosqlite), so the
  concurrent pricing reads run on real separate connections.
- httpx.AsyncClient over ASGITransport for all HTTP tests.
- AnyIO is the async runner via the pytest-anyio plugin (@pytest.mark.anyio).
"""

import os
import uuid
from collections.abc import AsyncGenerator
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

# Must be set before mariafaz.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

import httpx
import pytest
from httpx import ASGITransport
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import mariafaz.models  # noqa: F401
from mariafaz.config import settings
from mariafaz.database import Base, get_db, get_session_factory
from mariafaz.main import app
from mariafaz.models.market import MarketEvent, Seasonality
from mariafaz.models.property import KpiCompSetDaily, KpiDaily, Property


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio event loop."""

    return "asyncio"


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[Any, None]:
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield test_engine
    finally:
        await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def app_with_overrides(session_factory) -> AsyncGenerator[Any, None]:
    """FastAPI app whose DB dependencies point at the per-test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = ASGITransport(app=app_with_overrides)
    async with httpx.AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as client:
        yield client


def make_token(role: str | None = None, sub: str | None = None, **overrides) -> str:
    payload = {
        "sub": sub or str(uuid.uuid4()),
        "email": "owner@mariafaz.pt",
        "aud": settings.jwt_audience,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    if role:
        payload["app_metadata"] = {"role": role}
    payload.update(overrides)
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(role='admin')}"}


@pytest.fixture
def user_headers() -> dict:
    return {"Authorization": f"Bearer {make_token()}"}


# ─── Data builders ───


async def add_property(db: AsyncSession, name: str = "Casa da Vila", **kwargs) -> Property:
    prop = Property(name=name, location=kwargs.pop("location", "Sintra"), **kwargs)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def add_seasonality(
    db: AsyncSession, market_id: str, month: int, factor: str, weekend_premium: str | None = None
) -> None:
    db.add(Seasonality(
        market_id=market_id,
        month=month,
        factor=Decimal(factor),
        weekend_premium=Decimal(weekend_premium) if weekend_premium is not None else None,
    ))
    await db.commit()


async def add_event(
    db: AsyncSession,
    name: str,
    start: date,
    end: date,
    impact_score: int,
    market_id: str = "sintra",
    event_type: str = "festival",
) -> MarketEvent:
    event = MarketEvent(
        market_id=market_id,
        name=name,
        event_type=event_type,
        start_date=start,
        end_date=end,
        impact_score=impact_score,
    )
    db.add(event)
    await db.commit()
    return event


async def add_occupancy(db: AsyncSession, property_id: uuid.UUID, rates: list, last_day: date) -> None:
    """One kpi_daily row per rate, ending on last_day and going back one day each."""
    for offset, rate in enumerate(rates):
        db.add(KpiDaily(
            property_id=property_id,
            date=last_day - timedelta(days=offset),
            occupancy_rate=Decimal(str(rate)) if rate is not None else None,
        ))
    await db.commit()


async def add_comp_set(
    db: AsyncSession,
    property_id: uuid.UUID,
    day: date,
    ari: str | None = None,
    rgi: str | None = None,
    mpi: str | None = None,
) -> None:
    db.add(KpiCompSetDaily(
        property_id=property_id,
        date=day,
        ari=Decimal(ari) if ari is not None else None,
        rgi=Decimal(rgi) if rgi is not None else None,
        mpi=Decimal(mpi) if mpi is not None else None,
    ))
    await db.commit()
