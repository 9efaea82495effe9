from pricelist_loader.config import Settings
from pricelist_loader.table_fields import DecodeErrorPolicy


def test_defaults():
    settings = Settings()
    assert settings.provider_name == "AWS"
    assert settings.service_name == "AmazonEC2"
    assert settings.term_classes == ["OnDemand"]
    assert settings.on_decode_error == DecodeErrorPolicy.ABORT


def test_urls():
    settings = Settings(base_url="http://localhost:8000/", service_name="AmazonRDS")
    assert (
        settings.index_url
        == "http://localhost:8000/offers/v1.0/aws/AmazonRDS/current/region_index.json"
    )
    assert (
        settings.document_url("/offers/v1.0/aws/AmazonRDS/1/us-east-1/index.json")
        == "http://localhost:8000/offers/v1.0/aws/AmazonRDS/1/us-east-1/index.json"
    )


def test_region_filters():
    assert Settings().is_region_enabled("us-east-1")
    settings = Settings(include_regions=["us-east-1", "eu-west-1"])
    assert settings.is_region_enabled("us-east-1")
    assert not settings.is_region_enabled("ap-south-1")
    settings = Settings(exclude_regions=["us-east-1"])
    assert not settings.is_region_enabled("us-east-1")
    assert settings.is_region_enabled("eu-west-1")


def test_decode_error_policy_from_text():
    assert Settings(on_decode_error="skip").on_decode_error == DecodeErrorPolicy.SKIP
