import pytest
from pydantic import ValidationError

from pricelist_loader.insert import validate_item
from pricelist_loader.tables import Provider, Region, Service, Sku, Term, tables


def test_tables_have_base():
    """Make sure each SQLModel has a Base Pydantic parent without relations."""
    assert len(tables) == 5
    for model in tables:
        assert hasattr(model, "__validator__")
        schema = model.get_validator()
        assert schema.__name__.endswith("Base")
        assert hasattr(model, "__table__")
        assert not hasattr(schema, "__table__")


def test_table_names():
    assert [t.get_table_name() for t in [Provider, Service, Region, Sku, Term]] == [
        "provider",
        "service",
        "region",
        "sku",
        "term",
    ]


def test_comments():
    assert Sku.__table__.comment == "Priced product configurations (SKUs) of a Region."
    assert Sku.__table__.columns["vcpu"].comment.startswith("Number of virtual CPUs")
    assert "vcpu (int)" in Sku.__doc__


def test_columns():
    columns = Term.get_columns()
    assert columns["primary_keys"] == ["id"]
    assert "id" not in columns["attributes"]
    assert "created_at" in columns["attributes"]


def test_validate_item_fills_defaults():
    item = validate_item(Sku, {"code": "ABC123", "region_id": 1})
    assert item["vcpu"] == 0
    assert item["operating_system"] == ""
    item = validate_item(Term, {"sku_id": 1, "offer_term_code": "JRTCKXETXF"})
    assert item["term_class"] == "OnDemand"
    assert item["disabled"] is False
    assert item["created_at"] is not None


def test_validate_item_missing_required():
    with pytest.raises(ValidationError):
        validate_item(Term, {"sku_id": 1})
    with pytest.raises(ValidationError):
        validate_item(Sku, {"code": "ABC123"})


def test_timestamps_are_timezone_aware():
    item = validate_item(Term, {"sku_id": 1, "offer_term_code": "JRTCKXETXF"})
    assert item["created_at"].tzinfo is not None
    assert item["modified_at"].utcoffset().total_seconds() == 0
