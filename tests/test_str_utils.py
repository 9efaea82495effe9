from pricelist_loader.str_utils import join_url, snake_case


def test_snake_case():
    assert snake_case("Sku") == "sku"
    assert snake_case("OfferTerm") == "offer_term"
    assert snake_case("ServiceRegionSku") == "service_region_sku"


def test_join_url():
    assert join_url("https://example.com", "x.json") == "https://example.com/x.json"
    assert join_url("https://example.com/", "/x.json") == "https://example.com/x.json"
    assert join_url("https://example.com//", "//a/b.json") == "https://example.com/a/b.json"
