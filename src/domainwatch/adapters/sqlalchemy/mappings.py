"""SQLAlchemy mapping metadata for providers and the tables that reference them."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    event,
    orm,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import configure_mappers

from domainwatch.domain.model import Provider, ProviderCategory, ProviderSource
from domainwatch.domain.reconciliation import PROVIDERS_TABLE

if TYPE_CHECKING:
    from sqlalchemy.pool import ConnectionPoolEntry

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


def _string_enum(enum_cls: type[StrEnum], name: str) -> Enum:
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        values_callable=_enum_values,
        validate_strings=True,
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

provider_table = Table(
    PROVIDERS_TABLE,
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("category", _string_enum(ProviderCategory, "provider_category"), nullable=False),
    Column("name", String, nullable=False),
    Column("slug", String, nullable=False),
    Column("domain", String, nullable=True, index=True),
    Column(
        "source",
        _string_enum(ProviderSource, "provider_source"),
        nullable=False,
        default=ProviderSource.DISCOVERED,
    ),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    UniqueConstraint("category", "slug"),
)

domain_table = Table(
    "domains",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
    Column("created_at", UTCDateTime(), nullable=False),
)


def _provider_fk(name: str) -> Column[Any]:
    return Column(name, UUIDColumnType, ForeignKey(f"{PROVIDERS_TABLE}.id"), nullable=True)


def _domain_fk() -> Column[Any]:
    return Column(
        "domain_id",
        UUIDColumnType,
        ForeignKey("domains.id", ondelete="CASCADE"),
        primary_key=True,
    )


registration_table = Table(
    "registrations",
    mapper_registry.metadata,
    _domain_fk(),
    _provider_fk("registrar_provider_id"),
    _provider_fk("reseller_provider_id"),
    Column("updated_at", UTCDateTime(), nullable=True),
)

certificate_table = Table(
    "certificates",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "domain_id",
        UUIDColumnType,
        ForeignKey("domains.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("subject", String, nullable=True),
    _provider_fk("ca_provider_id"),
    Column("valid_to", UTCDateTime(), nullable=True),
)

hosting_table = Table(
    "hosting",
    mapper_registry.metadata,
    _domain_fk(),
    _provider_fk("hosting_provider_id"),
    _provider_fk("email_provider_id"),
    _provider_fk("dns_provider_id"),
    Column("updated_at", UTCDateTime(), nullable=True),
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(
    dbapi_connection: Any,
    connection_record: ConnectionPoolEntry,
) -> None:
    _ = connection_record
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Mapping ---------------------------------------------------------------------


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Provider, provider_table)

    configure_mappers()
    return mapper_registry

