"""v0.1.0

Revision ID: 3b1f6c2d9a47
Revises:
Create Date: 2026-10-18 10:12:45.318204

"""

from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b1f6c2d9a47"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "provider",
        sa.Column(
            "id",
            sa.Integer(),
            nullable=False,
            comment="Unique identifier, assigned by the database.",
        ),
        sa.Column(
            "name",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Name of the provider, e.g. AWS.",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        comment="Cloud providers publishing price lists, such as AWS.",
    )
    op.create_table(
        "service",
        sa.Column(
            "id",
            sa.Integer(),
            nullable=False,
            comment="Unique identifier, assigned by the database.",
        ),
        sa.Column(
            "name",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Service code as used in the price list, e.g. AmazonEC2.",
        ),
        sa.Column(
            "provider_id",
            sa.Integer(),
            nullable=False,
            comment="Reference to the Provider.",
        ),
        sa.ForeignKeyConstraint(["provider_id"], ["provider.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        comment="Services of a Provider with a separate price list, such as AmazonEC2.",
    )
    op.create_table(
        "region",
        sa.Column(
            "id",
            sa.Integer(),
            nullable=False,
            comment="Unique identifier, assigned by the database.",
        ),
        sa.Column(
            "code",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Region code, e.g. us-east-1.",
        ),
        sa.Column(
            "service_id",
            sa.Integer(),
            nullable=False,
            comment="Reference to the Service.",
        ),
        sa.ForeignKeyConstraint(["service_id"], ["service.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
        comment="Regions with a separate price list document of a Service.",
    )
    op.create_table(
        "sku",
        sa.Column(
            "id",
            sa.Integer(),
            nullable=False,
            comment="Unique identifier, assigned by the database.",
        ),
        sa.Column(
            "code",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Stock-keeping unit code of the priced product configuration.",
        ),
        sa.Column(
            "product_family",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Product family, e.g. Compute Instance.",
        ),
        sa.Column(
            "vcpu",
            sa.Integer(),
            nullable=False,
            comment="Number of virtual CPUs, 0 if not applicable.",
        ),
        sa.Column(
            "operating_system",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Operating system, e.g. Linux or Windows.",
        ),
        sa.Column(
            "instance_type",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Instance type, e.g. m5.large.",
        ),
        sa.Column(
            "storage",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Instance storage descriptor, e.g. EBS only.",
        ),
        sa.Column(
            "network",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Network performance descriptor, e.g. Up to 10 Gigabit.",
        ),
        sa.Column(
            "instance_sku",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="SKU of the related instance (instancesku attribute).",
        ),
        sa.Column(
            "processor",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Physical processor, e.g. Intel Xeon Platinum 8175.",
        ),
        sa.Column(
            "usage_type",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Usage type tag, e.g. BoxUsage:m5.large.",
        ),
        sa.Column(
            "region_id",
            sa.Integer(),
            nullable=False,
            comment="Reference to the Region.",
        ),
        sa.ForeignKeyConstraint(["region_id"], ["region.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
        comment="Priced product configurations (SKUs) of a Region.",
    )
    op.create_table(
        "term",
        sa.Column(
            "id",
            sa.Integer(),
            nullable=False,
            comment="Unique identifier, assigned by the database.",
        ),
        sa.Column(
            "sku_id",
            sa.Integer(),
            nullable=False,
            comment="Reference to the SKU.",
        ),
        sa.Column(
            "offer_term_code",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Offer term code, e.g. JRTCKXETXF for on-demand terms.",
        ),
        sa.Column(
            "lease_contract_length",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Lease contract length of reserved terms, e.g. 1yr.",
        ),
        sa.Column(
            "purchase_option",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Purchase option of reserved terms, e.g. No Upfront.",
        ),
        sa.Column(
            "offering_class",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Offering class of reserved terms, e.g. standard.",
        ),
        sa.Column(
            "term_class",
            sqlmodel.sql.sqltypes.AutoString(),
            nullable=False,
            comment="Term-class the term was listed under, e.g. OnDemand or Reserved.",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            comment="Timestamp of the first observation.",
        ),
        sa.Column(
            "modified_at",
            sa.DateTime(),
            nullable=False,
            comment="Timestamp of the last observation.",
        ),
        sa.Column(
            "disabled",
            sa.Boolean(),
            nullable=False,
            comment="If the record was disabled manually.",
        ),
        sa.ForeignKeyConstraint(["sku_id"], ["sku.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sku_id", "offer_term_code"),
        comment="Offer terms of a SKU, such as the on-demand or a reserved term.",
    )


def downgrade() -> None:
    op.drop_table("term")
    op.drop_table("sku")
    op.drop_table("region")
    op.drop_table("service")
    op.drop_table("provider")
