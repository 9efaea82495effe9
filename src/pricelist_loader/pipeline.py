"""Load the price list documents of all regions of a service into the database."""

from pathlib import Path
from typing import List, Optional

from .config import Settings
from .exceptions import DocumentError, FetchError, LoaderError
from .fetcher import Fetcher
from .flatten import load_document, parse_region_index
from .logger import ProgressPanel, RegionProgressTracker, logger
from .processor import RegionProcessor
from .store import Store
from .table_fields import DecodeErrorPolicy, RegionEntry, RegionStats, RegionStatus


class Pipeline:
    """Orchestrate the region index lookup and the processing of each region.

    Regions are processed one by one: get-or-create the Region, download
    its document into the staging directory, write the SKUs and terms,
    then remove the staged document.

    Args:
        settings: Run configuration, e.g. the provider and service names.
        store: Database operations.
        fetcher: Document downloader. Defaults to a new
            [Fetcher][pricelist_loader.fetcher.Fetcher] with `settings.timeout`.
        progress_panel: Optional `rich` panel for progress bar updates.
    """

    def __init__(
        self,
        settings: Settings,
        store: Store,
        fetcher: Optional[Fetcher] = None,
        progress_panel: Optional[ProgressPanel] = None,
    ):
        self.settings = settings
        self.store = store
        self.fetcher = fetcher or Fetcher(timeout=settings.timeout)
        self.progress_tracker = None
        if progress_panel:
            self.progress_tracker = RegionProgressTracker(progress_panel)
        self.processor = RegionProcessor(
            store,
            term_classes=settings.term_classes,
            progress_tracker=self.progress_tracker,
        )

    def prepare_staging_dir(self) -> Path:
        """Create the staging directory if missing."""
        staging_dir = Path(self.settings.staging_dir)
        try:
            staging_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LoaderError(
                f"Failed to create staging directory {staging_dir}: {exc}"
            ) from exc
        return staging_dir

    def list_regions(self) -> List[RegionEntry]:
        """Fetch the region index and list the enabled regions."""
        index = self.fetcher.fetch_json(self.settings.index_url)
        regions = parse_region_index(index)
        logger.info("%d region(s) found in the region index.", len(regions))
        return [r for r in regions if self.settings.is_region_enabled(r.region_code)]

    def run(self) -> List[RegionStats]:
        """Load all enabled regions.

        Returns:
            Statistics of each region in processing order.

        Raises:
            LoaderError: Fatal errors, e.g. the region index cannot be
                fetched or a region document cannot be decoded with the
                [abort][pricelist_loader.table_fields.DecodeErrorPolicy] policy.
        """
        staging_dir = self.prepare_staging_dir()
        regions = self.list_regions()

        provider_id = self.store.get_or_create_provider(self.settings.provider_name)
        service_id = self.store.get_or_create_service(
            self.settings.service_name, provider_id
        )

        if self.progress_tracker:
            self.progress_tracker.start_regions(
                self.settings.service_name, total=len(regions)
            )
        results = []
        for region in regions:
            results.append(self.process_region(region, service_id, staging_dir))
            if self.progress_tracker:
                self.progress_tracker.update_regions(step="")
                self.progress_tracker.advance_regions()

        processed = [
            r
            for r in results
            if r.status in (RegionStatus.PROCESSED, RegionStatus.CLEANED)
        ]
        logger.info(
            "%d of %d region(s) processed: %d SKU(s) and %d term(s) synced.",
            len(processed),
            len(results),
            sum(r.skus for r in results),
            sum(r.terms for r in results),
        )
        return results

    def process_region(
        self, region: RegionEntry, service_id: int, staging_dir: Path
    ) -> RegionStats:
        """Download, process, then remove the document of a region."""
        code = region.region_code
        stats = RegionStats(region_code=code)
        logger.info("Processing region: %s", code)
        region_id = self.store.get_or_create_region(code, service_id)

        url = self.settings.document_url(region.current_version_url)
        path = staging_dir / f"{code}.json"
        try:
            self.fetcher.download(url, path)
        except FetchError as exc:
            stats.status = RegionStatus.SKIPPED
            logger.error("%s: Skipping region: %s", code, exc)
            return stats
        stats.status = RegionStatus.FETCHED

        try:
            document = load_document(path)
            self.processor.process(code, region_id, document, stats)
        except DocumentError as exc:
            if self.settings.on_decode_error == DecodeErrorPolicy.ABORT:
                raise
            stats.status = RegionStatus.FAILED
            logger.error("%s: Skipping region: %s", code, exc)
        finally:
            self.remove_staged(path, stats)
        return stats

    def remove_staged(self, path: Path, stats: RegionStats) -> None:
        """Remove a staged document, logging but otherwise ignoring errors."""
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("%s: Failed to delete file %s: %s", stats.region_code, path, exc)
            return
        logger.debug("%s: Deleted file %s", stats.region_code, path)
        if stats.status == RegionStatus.PROCESSED:
            stats.status = RegionStatus.CLEANED
