"""Tiny helper classes for the most commonly used fields to be inherited by [pricelist_loader.tables][]."""

from datetime import datetime, timezone
from typing import Optional, Union

from sqlalchemy.inspection import inspect
from sqlalchemy.orm import declared_attr
from sqlmodel import Field, SQLModel

from .str_utils import snake_case
from .table_fields import ON_DEMAND


class PlMetaModel(SQLModel.__class__):
    """Custom class factory to auto-update table models.

    - Reuse description of the table and its fields as SQL comment.

        Checking if the table and its fields have explicit comment set
        to be shown in the `CREATE TABLE` statements, and if not,
        reuse the optional table and field descriptions. Table
        docstrings are truncated to first line.

    - Reuse description of the fields to dynamically append to the
        docstring in the Attributes section.

    - Set `__validator__` to the parent Pydantic model without
        `table=True`, which is useful for running validations.
        The Pydantic model is found by the parent class' name ending in "Base".
    """

    def __init__(subclass, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # early return for non-tables
        if subclass.model_config.get("table") is None:
            return
        satable = subclass.metadata.tables[subclass.__tablename__]

        # table comment
        if subclass.__doc__ and satable.comment is None:
            satable.comment = subclass.__doc__.splitlines()[0]

        # column comments
        for k, v in subclass.model_fields.items():
            comment = satable.columns[k].comment
            if v.description and comment is None:
                satable.columns[k].comment = v.description

        # describe table columns as attributes in docstring
        subclass.__doc__ = subclass.__doc__ + "\n\nAttributes:\n"
        for k, v in subclass.model_fields.items():
            if not hasattr(v.annotation, "__args__"):
                typehint = v.annotation.__name__
            else:
                typehint = str(v.annotation)
            description = satable.columns[k].comment
            subclass.__doc__ = subclass.__doc__ + f"    {k} ({typehint}): {description}\n"

        # find Pydantic model parent to be used for validating
        subclass.__validator__ = [
            m for m in subclass.__bases__ if m.__name__.endswith("Base")
        ][0]


class PlModel(SQLModel, metaclass=PlMetaModel):
    """Custom extensions to SQLModel objects and tables.

    Extra features:

    - auto-generated table names using [snake_case][pricelist_loader.str_utils.snake_case],
    - reuse description field of tables/columns as SQL comment,
    - reuse description field of columns to extend the `Attributes` section of the docstring.
    """

    @declared_attr  # type: ignore
    def __tablename__(cls) -> str:
        """Override tables names using all-lowercase [snake_case][pricelist_loader.str_utils.snake_case]."""
        return snake_case(cls.__name__)

    @classmethod
    def get_columns(cls) -> dict:
        """Return the table's column names in a dict for all, primary keys, and attributes."""
        columns = cls.__table__.columns.keys()
        pks = [pk.name for pk in inspect(cls).primary_key]
        attributes = [a for a in columns if a not in set(pks)]
        return {"all": columns, "primary_keys": pks, "attributes": attributes}

    @classmethod
    def get_table_name(cls) -> str:
        """Return the SQLModel object's table name."""
        return str(cls.__tablename__)

    @classmethod
    def get_validator(cls) -> Union["PlModel", None]:
        """Return the parent Base Pydantic model (without a table definition)."""
        if cls.model_config.get("table") is None:
            return None
        return cls.__validator__


def utcnow() -> datetime:
    """Current time in UTC, timezone-aware."""
    return datetime.now(timezone.utc)


class TimestampColumns(PlModel):
    """Helper class to add the `created_at`, `modified_at` and `disabled` columns."""

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Timestamp of the first observation.",
    )
    modified_at: datetime = Field(
        default_factory=utcnow,
        sa_column_kwargs={"onupdate": utcnow},
        description="Timestamp of the last observation.",
    )
    disabled: bool = Field(
        default=False,
        description="If the record was disabled manually.",
    )


class HasIdPK(PlModel):
    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Unique identifier, assigned by the database.",
    )


class ProviderFields(HasIdPK):
    name: str = Field(unique=True, description="Name of the provider, e.g. AWS.")


class ProviderBase(ProviderFields):
    pass


class ServiceFields(HasIdPK):
    name: str = Field(
        unique=True,
        description="Service code as used in the price list, e.g. AmazonEC2.",
    )
    provider_id: int = Field(
        foreign_key="provider.id", description="Reference to the Provider."
    )


class ServiceBase(ServiceFields):
    pass


class RegionFields(HasIdPK):
    code: str = Field(unique=True, description="Region code, e.g. us-east-1.")
    service_id: int = Field(
        foreign_key="service.id", description="Reference to the Service."
    )


class RegionBase(RegionFields):
    pass


class SkuFields(HasIdPK):
    code: str = Field(
        unique=True,
        description="Stock-keeping unit code of the priced product configuration.",
    )
    product_family: str = Field(
        default="", description="Product family, e.g. Compute Instance."
    )
    vcpu: int = Field(
        default=0, description="Number of virtual CPUs, 0 if not applicable."
    )
    operating_system: str = Field(
        default="", description="Operating system, e.g. Linux or Windows."
    )
    instance_type: str = Field(default="", description="Instance type, e.g. m5.large.")
    storage: str = Field(
        default="", description="Instance storage descriptor, e.g. EBS only."
    )
    network: str = Field(
        default="", description="Network performance descriptor, e.g. Up to 10 Gigabit."
    )
    instance_sku: str = Field(
        default="", description="SKU of the related instance (instancesku attribute)."
    )
    processor: str = Field(
        default="", description="Physical processor, e.g. Intel Xeon Platinum 8175."
    )
    usage_type: str = Field(
        default="", description="Usage type tag, e.g. BoxUsage:m5.large."
    )
    region_id: int = Field(foreign_key="region.id", description="Reference to the Region.")


class SkuBase(SkuFields):
    pass


class TermFields(HasIdPK):
    sku_id: int = Field(foreign_key="sku.id", description="Reference to the SKU.")
    offer_term_code: str = Field(
        description="Offer term code, e.g. JRTCKXETXF for on-demand terms."
    )
    lease_contract_length: str = Field(
        default="", description="Lease contract length of reserved terms, e.g. 1yr."
    )
    purchase_option: str = Field(
        default="", description="Purchase option of reserved terms, e.g. No Upfront."
    )
    offering_class: str = Field(
        default="", description="Offering class of reserved terms, e.g. standard."
    )
    term_class: str = Field(
        default=ON_DEMAND,
        description="Term-class the term was listed under, e.g. OnDemand or Reserved.",
    )


class TermBase(TimestampColumns, TermFields):
    pass
