"""
tests/conftest.py

Shared fixtures: an in-memory SQLite store with the full schema and the
five registries seeded, plus small delegated-stats feeds.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401
from db.base import Base
from rirstats.repositories.registry_repository import RegistryRepository

APNIC_FEED = "\n".join(
    [
        "# APNIC delegated-extended statistics",
        "2.3|apnic|20261016|4|19830613|20261015|+1000",
        "apnic|*|asn|*|1|summary",
        "apnic|*|ipv4|*|2|summary",
        "apnic|*|ipv6|*|1|summary",
        "apnic|AU|asn|173|1|20020801|allocated|A91A7381|e-stats",
        "apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated",
        "apnic|CN|ipv4|1.0.1.0|256|20110414|allocated|A92E1062",
        "apnic|AU|ipv6|2001:db8::|32|20040101|assigned",
        "apnic|ZZ|ipv4|not-an-address|256|20110414|allocated",
    ]
) + "\n"


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    factory = sessionmaker(bind=engine, class_=Session, expire_on_commit=False)
    with factory() as session:
        RegistryRepository(session).ensure_seeded()
    return factory


@pytest.fixture()
def db(session_factory: sessionmaker) -> Iterator[Session]:
    with session_factory() as session:
        yield session


@pytest.fixture()
def apnic_feed() -> bytes:
    return APNIC_FEED.encode("utf-8")
