from typing import Dict, List, Optional

from .exceptions import StoreError
from .flatten import flatten_products, select_terms
from .logger import RegionProgressTracker, log_start_end, logger
from .normalize import make_sku, make_term
from .store import Store
from .table_fields import ON_DEMAND, RegionStats, RegionStatus


class RegionProcessor:
    """Write the SKUs and offer terms of a region's price list document to the database.

    SKUs are written first, so that the terms can reference them. Failing
    records are logged and skipped, without stopping the region.

    Args:
        store: Database operations to write the records with.
        term_classes: Term-classes to load from the documents.
        progress_tracker: Optional tracker for progress bar updates.
    """

    def __init__(
        self,
        store: Store,
        term_classes: Optional[List[str]] = None,
        progress_tracker: Optional[RegionProgressTracker] = None,
    ):
        self.store = store
        self.term_classes = term_classes or [ON_DEMAND]
        self.progress_tracker = progress_tracker

    def process(
        self,
        region_code: str,
        region_id: int,
        document: dict,
        stats: Optional[RegionStats] = None,
    ) -> RegionStats:
        """Flatten, normalize and write the products and terms of a document.

        Args:
            region_code: Region code used in the logs.
            region_id: Identifier of the Region the SKUs belong to.
            document: The decoded price list document.
            stats: Optional counters to update, e.g. of the orchestrator.

        Returns:
            The counters of the written and failed records.
        """
        if stats is None:
            stats = RegionStats(region_code=region_code)
        self.process_products(region_code, region_id, flatten_products(document), stats)
        for term_class in self.term_classes:
            self.process_terms(
                region_code, select_terms(document, term_class), term_class, stats
            )
        stats.status = RegionStatus.PROCESSED
        logger.info(
            "%s: %d SKU(s) and %d term(s) synced, %d SKU(s) and %d term(s) failed, "
            "%d term group(s) skipped.",
            region_code,
            stats.skus,
            stats.terms,
            stats.skus_failed,
            stats.terms_failed,
            stats.term_groups_skipped,
        )
        return stats

    @log_start_end
    def process_products(
        self, region_code: str, region_id: int, products: List[dict], stats: RegionStats
    ) -> None:
        """Upsert a SKU for each product record."""
        if self.progress_tracker:
            self.progress_tracker.start_task(
                name=f"{region_code}: Syncing SKU(s)", total=len(products)
            )
        for product in products:
            sku = make_sku(product, region_id)
            try:
                self.store.upsert_sku(sku)
            except StoreError as exc:
                stats.skus_failed += 1
                logger.error("%s: Skipping SKU %s: %s", region_code, sku["code"], exc)
            else:
                stats.skus += 1
                logger.debug("%s: SKU %s synced.", region_code, sku["code"])
            if self.progress_tracker:
                self.progress_tracker.advance_task()
        if self.progress_tracker:
            self.progress_tracker.hide_task()

    @log_start_end
    def process_terms(
        self,
        region_code: str,
        terms: Dict[str, Dict[str, dict]],
        term_class: str,
        stats: RegionStats,
    ) -> None:
        """Upsert the terms of each SKU already found in the database."""
        if self.progress_tracker:
            self.progress_tracker.start_task(
                name=f"{region_code}: Syncing {term_class} term(s)", total=len(terms)
            )
        for sku_code, offers in terms.items():
            try:
                sku_id = self.store.lookup_sku_id(sku_code)
            except StoreError as exc:
                logger.error("%s: %s", region_code, exc)
                sku_id = None
            if sku_id is None:
                stats.term_groups_skipped += 1
                logger.warning(
                    "%s: Skipping %s term(s) of unknown SKU %s",
                    region_code,
                    term_class,
                    sku_code,
                )
            else:
                for term in offers.values():
                    self._upsert_term(region_code, sku_code, sku_id, term, term_class, stats)
            if self.progress_tracker:
                self.progress_tracker.advance_task()
        if self.progress_tracker:
            self.progress_tracker.hide_task()

    def _upsert_term(
        self,
        region_code: str,
        sku_code: str,
        sku_id: int,
        term: dict,
        term_class: str,
        stats: RegionStats,
    ) -> None:
        item = make_term(term, sku_id, term_class)
        try:
            self.store.upsert_term(item)
        except StoreError as exc:
            stats.terms_failed += 1
            logger.error(
                "%s: Skipping term %s of SKU %s: %s",
                region_code,
                item["offer_term_code"],
                sku_code,
                exc,
            )
        else:
            stats.terms += 1
            logger.debug(
                "%s: Term %s of SKU %s synced.",
                region_code,
                item["offer_term_code"],
                sku_code,
            )
