from pricelist_loader.normalize import SKU_DEFAULTS, make_sku, make_term, parse_int


def test_parse_int():
    assert parse_int("4") == 4
    assert parse_int("+3") == 3
    assert parse_int("-1") == -1
    assert parse_int(" 8 ") == 0
    assert parse_int("4_0") == 0
    assert parse_int("４") == 0
    assert parse_int(4) == 0
    assert parse_int(None) == 0
    assert parse_int("") == 0
    assert parse_int("not-a-number") == 0
    assert parse_int("1.5", default=-1) == -1


def test_make_sku():
    product = {
        "sku": "ABC123",
        "productFamily": "Compute Instance",
        "attributes": {
            "vcpu": "4",
            "operatingSystem": "Linux",
            "instanceType": "m5.xlarge",
            "instancesku": "XYZ789",
            "foo": "bar",
        },
    }
    sku = make_sku(product, region_id=7)
    assert sku["code"] == "ABC123"
    assert sku["product_family"] == "Compute Instance"
    assert sku["vcpu"] == 4
    assert sku["operating_system"] == "Linux"
    assert sku["instance_type"] == "m5.xlarge"
    assert sku["instance_sku"] == "XYZ789"
    assert sku["storage"] == ""
    assert sku["region_id"] == 7
    assert "foo" not in sku


def test_make_sku_defaults():
    sku = make_sku({"sku": "ABC123"}, region_id=1)
    for column, default in SKU_DEFAULTS.items():
        assert sku[column] == default


def test_make_sku_bad_vcpu():
    product = {"sku": "ABC123", "attributes": {"vcpu": "not-a-number"}}
    assert make_sku(product, region_id=1)["vcpu"] == 0
    product = {"sku": "ABC123", "attributes": {"vcpu": None}}
    assert make_sku(product, region_id=1)["vcpu"] == 0


def test_make_term():
    term = {
        "offerTermCode": "JRTCKXETXF",
        "sku": "ABC123",
        "priceDimensions": {"ABC123.JRTCKXETXF.6YS6EN2CT7": {}},
        "termAttributes": {},
    }
    item = make_term(term, sku_id=3)
    assert item == {
        "sku_id": 3,
        "offer_term_code": "JRTCKXETXF",
        "term_class": "OnDemand",
        "lease_contract_length": "",
        "purchase_option": "",
        "offering_class": "",
    }


def test_make_reserved_term():
    term = {
        "offerTermCode": "4NA7Y494T4",
        "termAttributes": {
            "LeaseContractLength": "1yr",
            "PurchaseOption": "No Upfront",
            "OfferingClass": "standard",
        },
    }
    item = make_term(term, sku_id=3, term_class="Reserved")
    assert item["term_class"] == "Reserved"
    assert item["lease_contract_length"] == "1yr"
    assert item["purchase_option"] == "No Upfront"
    assert item["offering_class"] == "standard"
