"""Flatten the nested maps of the AWS price list documents.

A region document lists the products keyed by their SKU code, and the
offer terms grouped by term-class, then by SKU code, then by offer term
key, e.g.:

```json
{
  "products": {"ABC123": {"sku": "ABC123", "productFamily": "...", "attributes": {}}},
  "terms": {"OnDemand": {"ABC123": {"ABC123.JRTCKXETXF": {"offerTermCode": "JRTCKXETXF"}}}}
}
```
"""

import json
from os import PathLike
from typing import Dict, List, Union

from .exceptions import DocumentDecodeError, DocumentReadError
from .logger import logger
from .table_fields import ON_DEMAND, RegionEntry


def load_document(path: Union[str, PathLike]) -> dict:
    """Open and decode a JSON price list document.

    Raises:
        DocumentReadError: The file cannot be opened or read.
        DocumentDecodeError: The content is not a JSON object, or its
            products and terms are not nested as expected, see
            [check_document][pricelist_loader.flatten.check_document].
    """
    try:
        with open(path, "rb") as fp:
            document = json.load(fp)
    except OSError as exc:
        raise DocumentReadError(f"Failed to open {path}: {exc}") from exc
    except ValueError as exc:
        raise DocumentDecodeError(f"Failed to decode {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise DocumentDecodeError(f"Failed to decode {path}: not a JSON object")
    try:
        check_document(document)
    except ValueError as exc:
        raise DocumentDecodeError(f"Failed to decode {path}: {exc}") from exc
    return document


def _check_map(value, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} is not a JSON object")
    return value


def check_document(document: dict) -> None:
    """Check the nesting of the products and terms of a price list document.

    Missing or `null` maps are accepted as empty.

    Raises:
        ValueError: A product, its attributes, a term group or a term
            record is not a JSON object.

    Examples:
        >>> check_document({"products": {"X": {"sku": "X"}}, "terms": {}})
        >>> check_document({"products": []})
        Traceback (most recent call last):
        ...
        ValueError: products is not a JSON object
    """
    for key, product in _check_map(document.get("products"), "products").items():
        product = _check_map(product, f"product {key}")
        _check_map(product.get("attributes"), f"attributes of product {key}")
    for term_class, groups in _check_map(document.get("terms"), "terms").items():
        for sku, offers in _check_map(groups, f"{term_class} terms").items():
            for key, offer in _check_map(offers, f"{term_class} terms of {sku}").items():
                offer = _check_map(offer, f"term {key}")
                _check_map(offer.get("termAttributes"), f"attributes of term {key}")


def flatten_products(document: dict) -> List[dict]:
    """List the product records of a price list document.

    Falls back to the product's key for the missing `sku`, and to an
    empty dict for the missing `attributes`.

    Examples:
        >>> flatten_products({"products": {"X": {"productFamily": "Storage"}}})
        [{'sku': 'X', 'productFamily': 'Storage', 'attributes': {}}]
    """
    return [
        {
            "sku": product.get("sku") or key,
            "productFamily": product.get("productFamily"),
            "attributes": product.get("attributes") or {},
        }
        for key, product in (document.get("products") or {}).items()
    ]


def select_terms(
    document: dict, term_class: str = ON_DEMAND
) -> Dict[str, Dict[str, dict]]:
    """Offer terms of a term-class, keyed by SKU code then by offer term key.

    Examples:
        >>> select_terms({"terms": {"Reserved": {}}})
        {}
    """
    return (document.get("terms") or {}).get(term_class) or {}


def parse_region_index(document: dict) -> List[RegionEntry]:
    """List the regions of a region index document in document order.

    Entries without a region code or document path are skipped.

    Raises:
        DocumentDecodeError: No `regions` mapping found in the document.
    """
    regions = document.get("regions")
    if not isinstance(regions, dict):
        raise DocumentDecodeError("No regions found in the region index.")
    entries = []
    for key, region in regions.items():
        try:
            entries.append(
                RegionEntry(
                    key=key,
                    region_code=region["regionCode"],
                    current_version_url=region["currentVersionUrl"],
                )
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping incomplete region index entry: %s", key)
    return entries
