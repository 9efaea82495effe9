"""Table definitions for providers, services, regions, SKUs and offer terms."""

from typing import List

from sqlalchemy import UniqueConstraint
from sqlmodel import Relationship, SQLModel

from .table_bases import (
    ProviderBase,
    RegionBase,
    ServiceBase,
    SkuBase,
    TermBase,
)


class Provider(ProviderBase, table=True):
    """Cloud providers publishing price lists, such as AWS.

    Examples:
        >>> from pricelist_loader.tables import Provider
        >>> Provider(name="AWS")
        Provider(...name='AWS'...)
    """

    services: List["Service"] = Relationship(back_populates="provider")


class Service(ServiceBase, table=True):
    """Services of a Provider with a separate price list, such as AmazonEC2."""

    provider: Provider = Relationship(back_populates="services")
    regions: List["Region"] = Relationship(back_populates="service")


class Region(RegionBase, table=True):
    """Regions with a separate price list document of a Service."""

    service: Service = Relationship(back_populates="regions")
    skus: List["Sku"] = Relationship(
        back_populates="region", sa_relationship_kwargs={"viewonly": True}
    )


class Sku(SkuBase, table=True):
    """Priced product configurations (SKUs) of a Region."""

    region: Region = Relationship(back_populates="skus")
    terms: List["Term"] = Relationship(
        back_populates="sku", sa_relationship_kwargs={"viewonly": True}
    )


class Term(TermBase, table=True):
    """Offer terms of a SKU, such as the on-demand or a reserved term."""

    __table_args__ = (UniqueConstraint("sku_id", "offer_term_code"),)

    sku: Sku = Relationship(back_populates="terms")


def is_table(table):
    try:
        return table.model_config["table"] is True
    except Exception:
        return False


tables: List[SQLModel] = [o for o in globals().values() if is_table(o)]
"""List of all SQLModel (table) models."""
