"""Run configuration of the price list loader."""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from .str_utils import join_url
from .table_fields import ON_DEMAND, DecodeErrorPolicy

DEFAULT_BASE_URL = "https://pricing.us-east-1.amazonaws.com"
DEFAULT_CONNECTION_STRING = "sqlite:///pricelist.db"


class Settings(BaseModel):
    """Parameters of a price list loading run.

    Examples:
        >>> Settings().index_url
        'https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/AmazonEC2/current/region_index.json'
        >>> Settings().document_url("/offers/v1.0/aws/AmazonEC2/x/us-east-1/index.json")
        'https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/AmazonEC2/x/us-east-1/index.json'
    """

    connection_string: str = DEFAULT_CONNECTION_STRING
    """Database URL with SQLAlchemy dialect."""
    base_url: str = DEFAULT_BASE_URL
    """Base URL of the price list API, prefixed to the relative document paths."""
    provider_name: str = "AWS"
    """Name of the Provider record the Service belongs to."""
    service_name: str = "AmazonEC2"
    """Service code, used both in the index URL and as the Service record name."""
    staging_dir: Path = Path("price-list")
    """Local directory to download the region documents into."""
    term_classes: List[str] = Field(default_factory=lambda: [ON_DEMAND])
    """Term-classes to be loaded from the documents."""
    include_regions: List[str] = []
    """Region codes to load. Empty list means all regions of the index."""
    exclude_regions: List[str] = []
    """Region codes NOT to load."""
    on_decode_error: DecodeErrorPolicy = DecodeErrorPolicy.ABORT
    """[Policy][pricelist_loader.table_fields.DecodeErrorPolicy] for unreadable region documents."""
    timeout: float = 300
    """Timeout in seconds for connecting to and reading from the price list API."""

    @property
    def index_url(self) -> str:
        """URL of the region index document of the service."""
        return join_url(
            self.base_url,
            f"/offers/v1.0/aws/{self.service_name}/current/region_index.json",
        )

    def document_url(self, path: str) -> str:
        """URL of a region document from its path relative to the base URL."""
        return join_url(self.base_url, path)

    def is_region_enabled(self, region_code: str) -> bool:
        """Checks if a region is to be loaded as per the include/exclude filters."""
        if self.include_regions and region_code not in self.include_regions:
            return False
        return region_code not in self.exclude_regions
