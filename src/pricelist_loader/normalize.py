"""Map the free-form product and term attributes to SKU and Term records.

Missing or malformed attributes are not errors: they fall back to the
values of [SKU_DEFAULTS][pricelist_loader.normalize.SKU_DEFAULTS] and
[TERM_DEFAULTS][pricelist_loader.normalize.TERM_DEFAULTS].
"""

from re import compile
from typing import Any, Dict, Optional

from .table_fields import ON_DEMAND

SKU_ATTRIBUTES: Dict[str, str] = {
    "vcpu": "vcpu",
    "operating_system": "operatingSystem",
    "instance_type": "instanceType",
    "storage": "storage",
    "network": "networkPerformance",
    "instance_sku": "instancesku",
    "processor": "physicalProcessor",
    "usage_type": "usagetype",
}
"""SKU columns mapped to the keys of the product `attributes`."""

SKU_DEFAULTS: Dict[str, Any] = {
    "product_family": "",
    "vcpu": 0,
    "operating_system": "",
    "instance_type": "",
    "storage": "",
    "network": "",
    "instance_sku": "",
    "processor": "",
    "usage_type": "",
}
"""Values of the SKU columns when missing or unparseable in the product record."""

TERM_ATTRIBUTES: Dict[str, str] = {
    "lease_contract_length": "LeaseContractLength",
    "purchase_option": "PurchaseOption",
    "offering_class": "OfferingClass",
}
"""Term columns mapped to the keys of the `termAttributes`."""

TERM_DEFAULTS: Dict[str, Any] = {
    "offer_term_code": "",
    "lease_contract_length": "",
    "purchase_option": "",
    "offering_class": "",
}
"""Values of the Term columns when missing in the term record."""

INTEGER = compile(r"[+-]?[0-9]+")
"""Optionally signed decimal digits, without whitespace or underscores."""


def parse_int(text: Optional[str], default: int = 0) -> int:
    """Parse an integer, falling back to `default` on missing or invalid text.

    Only plain, optionally signed decimal digits are accepted, so e.g.
    `" 8 "` or `"4_0"` fall back to `default`.

    Examples:
        >>> parse_int("4")
        4
        >>> parse_int("not-a-number")
        0
        >>> parse_int(None, default=1)
        1
    """
    if not isinstance(text, str) or not INTEGER.fullmatch(text):
        return default
    return int(text)


def _text(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


def make_sku(product: dict, region_id: int) -> dict:
    """Create a [Sku][pricelist_loader.tables.Sku]-compatible dict from a product record.

    Args:
        product: A product record with `sku`, `productFamily` and `attributes`,
            see [flatten_products][pricelist_loader.flatten.flatten_products].
        region_id: Identifier of the Region the product is listed in.

    Examples:
        >>> sku = make_sku({"sku": "ABC123", "attributes": {"vcpu": "2"}}, 1)
        >>> sku["code"], sku["vcpu"], sku["operating_system"]
        ('ABC123', 2, '')
    """
    attributes = product.get("attributes") or {}
    sku = {
        "code": _text(product.get("sku")),
        "product_family": _text(
            product.get("productFamily"), SKU_DEFAULTS["product_family"]
        ),
        "region_id": region_id,
    }
    for column, key in SKU_ATTRIBUTES.items():
        if column == "vcpu":
            sku[column] = parse_int(attributes.get(key), SKU_DEFAULTS[column])
        else:
            sku[column] = _text(attributes.get(key), SKU_DEFAULTS[column])
    return sku


def make_term(term: dict, sku_id: int, term_class: str = ON_DEMAND) -> dict:
    """Create a [Term][pricelist_loader.tables.Term]-compatible dict from a term record.

    Price dimensions are ignored, timestamps and the disabled flag are left
    to the table defaults.

    Args:
        term: A term record with `offerTermCode` and `termAttributes`.
        sku_id: Identifier of the SKU the term belongs to.
        term_class: The term-class the record was listed under.
    """
    attributes = term.get("termAttributes") or {}
    item = {
        "sku_id": sku_id,
        "offer_term_code": _text(
            term.get("offerTermCode"), TERM_DEFAULTS["offer_term_code"]
        ),
        "term_class": term_class,
    }
    for column, key in TERM_ATTRIBUTES.items():
        item[column] = _text(attributes.get(key), TERM_DEFAULTS[column])
    return item
