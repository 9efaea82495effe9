import json

import pytest
from conftest import make_document, make_region_index

from pricelist_loader.exceptions import DocumentDecodeError, DocumentReadError
from pricelist_loader.flatten import (
    check_document,
    flatten_products,
    load_document,
    parse_region_index,
    select_terms,
)


def test_flatten_products():
    document = make_document(skus=["A", "B", "C"])
    products = flatten_products(document)
    assert len(products) == 3
    assert [p["sku"] for p in products] == ["A", "B", "C"]
    assert products[0]["productFamily"] == "Compute Instance"
    assert products[0]["attributes"]["vcpu"] == "4"


def test_flatten_products_missing_fields():
    document = {"products": {"X": {"attributes": None}, "Y": {"sku": "Y"}}}
    assert flatten_products(document) == [
        {"sku": "X", "productFamily": None, "attributes": {}},
        {"sku": "Y", "productFamily": None, "attributes": {}},
    ]
    assert flatten_products({}) == []


def test_select_terms():
    document = make_document(skus=["A", "B"])
    terms = select_terms(document)
    assert list(terms.keys()) == ["A", "B"]
    assert terms["A"]["A.JRTCKXETXF"]["offerTermCode"] == "JRTCKXETXF"
    assert select_terms(document, "Reserved") == {}
    assert select_terms({}) == {}


def test_load_document(tmp_path):
    path = tmp_path / "us-east-1.json"
    path.write_text(json.dumps(make_document()))
    assert load_document(path)["offerCode"] == "AmazonEC2"


def test_load_document_missing_file(tmp_path):
    with pytest.raises(DocumentReadError):
        load_document(tmp_path / "missing.json")


def test_load_document_invalid(tmp_path):
    path = tmp_path / "invalid.json"
    path.write_text('{"products": {')
    with pytest.raises(DocumentDecodeError):
        load_document(path)
    path.write_text("[1, 2, 3]")
    with pytest.raises(DocumentDecodeError):
        load_document(path)


def test_parse_region_index():
    index = make_region_index("us-east-1", "eu-west-1")
    index["regions"]["broken"] = {"regionCode": "broken"}
    index["regions"]["null"] = None
    entries = parse_region_index(index)
    assert [e.region_code for e in entries] == ["us-east-1", "eu-west-1"]
    assert entries[0].key == "us-east-1"
    assert entries[0].current_version_url.endswith("/us-east-1/index.json")


def test_parse_region_index_without_regions():
    with pytest.raises(DocumentDecodeError):
        parse_region_index({"formatVersion": "v1.0"})


def test_check_document():
    check_document(make_document(skus=["A", "B"]))
    check_document({})
    check_document({"products": None, "terms": {"OnDemand": None}})


@pytest.mark.parametrize(
    "document",
    [
        {"products": []},
        {"products": {"A": "oops"}},
        {"products": {"A": {"attributes": ["vcpu"]}}},
        {"terms": []},
        {"terms": {"OnDemand": []}},
        {"terms": {"OnDemand": {"A": "oops"}}},
        {"terms": {"OnDemand": {"A": {"A.JRTCKXETXF": 42}}}},
        {"terms": {"OnDemand": {"A": {"A.JRTCKXETXF": {"termAttributes": "1yr"}}}}},
    ],
)
def test_check_document_wrong_structure(document, tmp_path):
    with pytest.raises(ValueError):
        check_document(document)
    path = tmp_path / "us-east-1.json"
    path.write_text(json.dumps(document))
    with pytest.raises(DocumentDecodeError):
        load_document(path)
