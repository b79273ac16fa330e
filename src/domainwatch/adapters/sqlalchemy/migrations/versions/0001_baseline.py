"""baseline: providers and referencing tables

Revision ID: 0001
Revises:
Create Date: 2026-09-28 10:12:44.118203
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

PROVIDER_CATEGORIES = ("hosting", "email", "dns", "ca", "registrar")
PROVIDER_SOURCES = ("catalog", "discovered")


def upgrade() -> None:
    op.create_table(
        "providers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "category",
            sa.Enum(*PROVIDER_CATEGORIES, name="provider_category", native_enum=False),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("domain", sa.String(), nullable=True),
        sa.Column(
            "source",
            sa.Enum(*PROVIDER_SOURCES, name="provider_source", native_enum=False),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_providers")),
        sa.UniqueConstraint("category", "slug", name=op.f("uq_providers_category_slug")),
    )
    op.create_index(op.f("ix_providers_domain"), "providers", ["domain"])

    op.create_table(
        "domains",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_domains")),
        sa.UniqueConstraint("name", name=op.f("uq_domains_name")),
    )

    op.create_table(
        "registrations",
        sa.Column("domain_id", sa.Uuid(), nullable=False),
        sa.Column("registrar_provider_id", sa.Uuid(), nullable=True),
        sa.Column("reseller_provider_id", sa.Uuid(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["domain_id"],
            ["domains.id"],
            name=op.f("fk_registrations_domain_id_domains"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["registrar_provider_id"],
            ["providers.id"],
            name=op.f("fk_registrations_registrar_provider_id_providers"),
        ),
        sa.ForeignKeyConstraint(
            ["reseller_provider_id"],
            ["providers.id"],
            name=op.f("fk_registrations_reseller_provider_id_providers"),
        ),
        sa.PrimaryKeyConstraint("domain_id", name=op.f("pk_registrations")),
    )

    op.create_table(
        "certificates",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("domain_id", sa.Uuid(), nullable=False),
        sa.Column("subject", sa.String(), nullable=True),
        sa.Column("ca_provider_id", sa.Uuid(), nullable=True),
        sa.Column("valid_to", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["domain_id"],
            ["domains.id"],
            name=op.f("fk_certificates_domain_id_domains"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["ca_provider_id"],
            ["providers.id"],
            name=op.f("fk_certificates_ca_provider_id_providers"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_certificates")),
    )
    op.create_index(op.f("ix_certificates_domain_id"), "certificates", ["domain_id"])

    op.create_table(
        "hosting",
        sa.Column("domain_id", sa.Uuid(), nullable=False),
        sa.Column("hosting_provider_id", sa.Uuid(), nullable=True),
        sa.Column("email_provider_id", sa.Uuid(), nullable=True),
        sa.Column("dns_provider_id", sa.Uuid(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["domain_id"],
            ["domains.id"],
            name=op.f("fk_hosting_domain_id_domains"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["hosting_provider_id"],
            ["providers.id"],
            name=op.f("fk_hosting_hosting_provider_id_providers"),
        ),
        sa.ForeignKeyConstraint(
            ["email_provider_id"],
            ["providers.id"],
            name=op.f("fk_hosting_email_provider_id_providers"),
        ),
        sa.ForeignKeyConstraint(
            ["dns_provider_id"],
            ["providers.id"],
            name=op.f("fk_hosting_dns_provider_id_providers"),
        ),
        sa.PrimaryKeyConstraint("domain_id", name=op.f("pk_hosting")),
    )


def downgrade() -> None:
    op.drop_table("hosting")
    op.drop_index(op.f("ix_certificates_domain_id"), table_name="certificates")
    op.drop_table("certificates")
    op.drop_table("registrations")
    op.drop_table("domains")
    op.drop_index(op.f("ix_providers_domain"), table_name="providers")
    op.drop_table("providers")
