"""Merges the columns of every source of a table."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from ..config import FetchConfig
from ..datasources import Mappings, fetch_mappings
from ..errors import SourceError
from ..mapping.resolver import resolve_columns
from .schema import Column, Table, TableSource

logger = logging.getLogger(__name__)

MappingFetcher = Callable[[TableSource, Dict[str, Any]], Mappings]


@dataclass
class SourceOutcome:
    """Result of resolving the columns of one source."""

    source: TableSource
    columns: List[Column] = field(default_factory=list)
    error: Optional[SourceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class TableResolution:
    """Per-source outcomes for one table, in source order."""

    table: Table
    outcomes: List[SourceOutcome] = field(default_factory=list)

    @property
    def failed_sources(self) -> List[TableSource]:
        failed = []
        for outcome in self.outcomes:
            if not outcome.ok:
                failed.append(outcome.source)
        return failed

    @property
    def columns(self) -> List[Column]:
        """Union of all source columns, first-seen order."""
        merged: List[Column] = []
        seen: Set[Column] = set()
        for outcome in self.outcomes:
            for column in outcome.columns:
                if column not in seen:
                    seen.add(column)
                    merged.append(column)
        return merged


class TableColumnMerger:
    """Resolves table columns from all of a table's sources.

    A failing source is logged and contributes no columns; it never
    fails the table.
    """

    def __init__(
        self,
        fetch_config: Optional[FetchConfig] = None,
        fetcher: MappingFetcher = fetch_mappings,
    ):
        """Initialize merger.

        Args:
            fetch_config: Fetch options (timeouts, parallelism)
            fetcher: Fetches the mappings of one source
        """
        self.fetch_config = fetch_config or FetchConfig()
        self.fetcher = fetcher

    def resolve_source(self, source: TableSource) -> SourceOutcome:
        """Fetch and resolve the columns of a single source."""
        try:
            mappings = self.fetcher(source, self.fetch_config.datasource_options())
            columns = resolve_columns(mappings, source.document_type)
        except SourceError as e:
            if e.source is None:
                e.source = source
            logger.warning(f"Source {source.describe()} contributes no columns: {e}")
            return SourceOutcome(source=source, error=e)

        logger.debug(f"Source {source.describe()} resolved {len(columns)} columns")
        return SourceOutcome(source=source, columns=columns)

    def resolve(self, table: Table) -> TableResolution:
        """Resolve a table without changing it."""
        return self.resolve_all([table])[0]

    def merge(self, table: Table) -> TableResolution:
        """Resolve a table and install the merged columns on it."""
        return self.merge_all([table])[0]

    def resolve_all(self, tables: Iterable[Table]) -> List[TableResolution]:
        """Resolve many tables, fetching their sources in one batch."""
        tables = list(tables)
        work: List[Tuple[int, TableSource]] = []
        for position, table in enumerate(tables):
            for source in table.sources:
                work.append((position, source))

        outcomes = self._run([source for _, source in work])

        resolutions = []
        for table in tables:
            resolutions.append(TableResolution(table=table))
        for (position, _), outcome in zip(work, outcomes):
            resolutions[position].outcomes.append(outcome)
        return resolutions

    def merge_all(self, tables: Iterable[Table]) -> List[TableResolution]:
        """Resolve many tables and install their merged columns."""
        resolutions = self.resolve_all(tables)
        for resolution in resolutions:
            resolution.table.set_columns(resolution.columns)
            if resolution.failed_sources:
                logger.warning(
                    f"Table {resolution.table.name}: "
                    f"{len(resolution.failed_sources)} of {len(resolution.outcomes)} sources failed"
                )
        return resolutions

    def _run(self, sources: List[TableSource]) -> List[SourceOutcome]:
        """Resolve sources, in parallel when enabled; results keep input order."""
        config = self.fetch_config
        if not config.enable_parallel_fetch or config.max_threads <= 1 or len(sources) <= 1:
            outcomes = []
            for source in sources:
                outcomes.append(self.resolve_source(source))
            return outcomes

        workers = min(config.max_threads, len(sources))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mapping-fetch") as pool:
            return list(pool.map(self.resolve_source, sources))
