"""Enumerations, Pydantic models & other helper classes used in [pricelist_loader.tables][] and the pipeline."""

from enum import Enum

from pydantic import BaseModel

ON_DEMAND = "OnDemand"
"""Term-class of the on-demand offer terms in the AWS price list documents."""


class RegionStatus(str, Enum):
    """Processing state of a region's price list document within a run."""

    PENDING = "pending"
    """Listed in the region index, not fetched yet."""
    FETCHED = "fetched"
    """Document downloaded to the staging directory."""
    PROCESSED = "processed"
    """SKUs and terms of the document were written to the database."""
    CLEANED = "cleaned"
    """Staged document removed after processing."""
    SKIPPED = "skipped"
    """Document could not be downloaded, region skipped."""
    FAILED = "failed"
    """Document could not be read or decoded, region skipped."""


class DecodeErrorPolicy(str, Enum):
    """What to do when a region's price list document cannot be read or decoded."""

    ABORT = "abort"
    """Stop the whole run."""
    SKIP = "skip"
    """Log the error and continue with the next region."""


class RegionEntry(BaseModel):
    """A region listed in the region index document."""

    key: str
    """Key of the region in the index document."""
    region_code: str
    """Region code, e.g. us-east-1."""
    current_version_url: str
    """Path of the region's current price list document relative to the base URL."""


class RegionStats(BaseModel):
    """Outcome of processing a single region."""

    region_code: str
    """Region code, e.g. us-east-1."""
    status: RegionStatus = RegionStatus.PENDING
    """Last reached [processing state][pricelist_loader.table_fields.RegionStatus]."""
    skus: int = 0
    """Number of SKUs written."""
    skus_failed: int = 0
    """Number of SKUs that could not be written."""
    terms: int = 0
    """Number of terms written."""
    terms_failed: int = 0
    """Number of terms that could not be written."""
    term_groups_skipped: int = 0
    """Number of term groups skipped as their SKU was not found in the database."""
