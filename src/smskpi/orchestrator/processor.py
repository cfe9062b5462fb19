"""Background execution of KPI computations.

Reading, parsing and aggregating a CSV is blocking work. The processor runs it
on a thread pool so the caller's thread stays free, and hands back futures the
caller resolves when it wants the result. Each job opens its own stream and
builds its own result; nothing is shared between jobs.
"""
import concurrent.futures
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from smskpi.config.settings import AppSettings
from smskpi.csvio.reader import open_source
from smskpi.kpi.aggregator import compute_kpis
from smskpi.kpi.month_detail import compute_month_detail
from smskpi.kpi.models import AggregationResult, MonthDetail, MonthKey
from smskpi.kpi.normalizer import RowNormalizer
from smskpi.utils.logger import get_logger, set_source_context

logger = get_logger()

PathLike = Union[str, Path]


@dataclass
class ProcessingResult:
    path: str
    kpis: Optional[AggregationResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class KpiProcessor:
    """Runs KPI jobs on a worker pool: open file -> parse -> aggregate."""

    def __init__(self, settings: Optional[AppSettings] = None, max_workers: Optional[int] = None):
        self.settings = settings
        if settings is not None:
            self.normalizer = RowNormalizer(
                date_format=settings.csv_date_format,
                excluded_labels=settings.csv_excluded_labels,
                default_label=settings.csv_default_label
            )
            self.encoding = settings.csv_encoding
            workers = max_workers or settings.max_workers
        else:
            self.normalizer = RowNormalizer()
            self.encoding = "utf-8-sig"
            workers = max_workers or 4
        self.executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="smskpi"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)

    def kpis_for_path(self, path: PathLike) -> AggregationResult:
        """Compute KPIs for one file on the calling thread."""
        set_source_context(Path(path).name)
        try:
            with open_source(path) as stream:
                return compute_kpis(stream, normalizer=self.normalizer, encoding=self.encoding)
        finally:
            set_source_context(None)

    def month_detail_for_path(self, path: PathLike, month: Union[MonthKey, str]) -> MonthDetail:
        """Compute a month breakdown for one file on the calling thread."""
        set_source_context(Path(path).name)
        try:
            with open_source(path) as stream:
                return compute_month_detail(
                    stream, month, normalizer=self.normalizer, encoding=self.encoding
                )
        finally:
            set_source_context(None)

    def submit_kpis(self, path: PathLike) -> "concurrent.futures.Future[AggregationResult]":
        """Schedule a KPI computation in the background."""
        return self.executor.submit(self.kpis_for_path, path)

    def submit_month_detail(
        self, path: PathLike, month: Union[MonthKey, str]
    ) -> "concurrent.futures.Future[MonthDetail]":
        """Schedule a month breakdown in the background."""
        return self.executor.submit(self.month_detail_for_path, path, month)

    def process_all(self, paths: List[PathLike]) -> List[ProcessingResult]:
        """
        Compute KPIs for several files concurrently.

        Failures are recorded per file instead of raised. Results keep the
        order of ``paths``.
        """
        future_to_path = {self.submit_kpis(path): str(path) for path in paths}
        by_path = {}

        for future in concurrent.futures.as_completed(future_to_path):
            path = future_to_path[future]
            try:
                by_path[path] = ProcessingResult(path, kpis=future.result())
            except Exception as e:
                logger.error(f"Failed to compute KPIs for {path}: {e}")
                by_path[path] = ProcessingResult(path, error=str(e))

        logger.info(
            f"Processed {len(paths)} files: "
            f"{sum(1 for r in by_path.values() if r.ok)} ok, "
            f"{sum(1 for r in by_path.values() if not r.ok)} failed"
        )
        return [by_path[str(path)] for path in paths]
