from re import sub


# https://www.w3resource.com/python-exercises/string/python-data-type-string-exercise-97.php
def snake_case(text: str) -> str:
    """Convert CamelCase to snake_case.

    Args:
        text: A CamelCase text.

    Returns:
        snake_case version of the text.

    Examples:
        >>> snake_case('OfferTerm')
        'offer_term'
    """
    return "_".join(sub("([A-Z][a-z]+)", r" \1", text).split()).lower()


def join_url(base: str, path: str) -> str:
    """Join a base URL and a path with exactly one slash between them.

    Examples:
        >>> join_url("https://pricing.us-east-1.amazonaws.com/", "/offers/x.json")
        'https://pricing.us-east-1.amazonaws.com/offers/x.json'
        >>> join_url("https://example.com", "x.json")
        'https://example.com/x.json'
    """
    return base.rstrip("/") + "/" + path.lstrip("/")
