import json

import pytest

from pricelist_loader.store import Store


def make_document(skus=("ABC123",), offer_term_code="JRTCKXETXF", vcpu="4"):
    """Minimal price list document with an on-demand term for each SKU."""
    products = {}
    on_demand = {}
    for sku in skus:
        products[sku] = {
            "sku": sku,
            "productFamily": "Compute Instance",
            "attributes": {
                "vcpu": vcpu,
                "operatingSystem": "Linux",
                "instanceType": "m5.xlarge",
                "storage": "EBS only",
                "networkPerformance": "Up to 10 Gigabit",
                "physicalProcessor": "Intel Xeon Platinum 8175",
                "usagetype": "BoxUsage:m5.xlarge",
            },
        }
        on_demand[sku] = {
            f"{sku}.{offer_term_code}": {
                "offerTermCode": offer_term_code,
                "sku": sku,
                "effectiveDate": "2024-01-01T00:00:00Z",
                "priceDimensions": {},
                "termAttributes": {},
            }
        }
    return {
        "formatVersion": "v1.0",
        "offerCode": "AmazonEC2",
        "products": products,
        "terms": {"OnDemand": on_demand},
    }


def make_region_index(*codes):
    return {
        "formatVersion": "v1.0",
        "regions": {
            code: {
                "regionCode": code,
                "currentVersionUrl": f"/offers/v1.0/aws/AmazonEC2/20240101/{code}/index.json",
            }
            for code in codes
        },
    }


class FakeFetcher:
    """Serve the region index and the region documents from memory.

    Documents are either dicts (dumped as JSON), raw strings, or exceptions
    to be raised on download."""

    def __init__(self, index: dict, documents: dict):
        self.index = index
        self.documents = documents
        self.downloaded = []

    def fetch_json(self, url):
        return self.index

    def download(self, url, path):
        code = url.split("/")[-2]
        document = self.documents[code]
        if isinstance(document, Exception):
            raise document
        with open(path, "w") as f:
            f.write(document if isinstance(document, str) else json.dumps(document))
        self.downloaded.append(path)
        return path


@pytest.fixture
def connection_string(tmp_path):
    return f"sqlite:///{tmp_path / 'pricelist.db'}"


@pytest.fixture
def store(connection_string):
    with Store(connection_string) as store:
        store.init_schema(migrate=False)
        yield store
