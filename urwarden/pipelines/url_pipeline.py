from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from urwarden.config import Settings
from urwarden.exceptions import URLError
from urwarden.schemas.result_schemas import Result
from urwarden.services.blocklist_service import BlocklistIndex
from urwarden.services.rules_service import RuleEvaluator
from urwarden.services.score_service import ScoreAggregator
from urwarden.services.url_service import normalize_url


@dataclass
class BatchOutcome:
    """Result of one URL in a batch: either a result or an input error."""
    input_url: str
    result: Optional[Result] = None
    error: Optional[URLError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class URLPipeline:
    """
    Main URL pipeline: normalize -> evaluate rules -> aggregate score.

    One pipeline (and its blocklist index) can be shared by many threads.
    """

    def __init__(self, blocklist: BlocklistIndex, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.blocklist = blocklist
        self.evaluator = RuleEvaluator(blocklist)
        self.aggregator = ScoreAggregator.from_settings(self.settings)

    def analyze(self, raw_url: str) -> Result:
        """
        Classify a single URL.

        Raises:
            URLError: If the URL cannot be normalized
        """
        normalized = normalize_url(raw_url)
        reasons = self.evaluator.evaluate_all(normalized)
        score, label = self.aggregator.aggregate(reasons)
        return Result(
            input_url=raw_url,
            normalized=normalized,
            score=score,
            label=label,
            reasons=tuple(reasons),
            timestamp=datetime.now(timezone.utc),
        )

    def _analyze_outcome(self, raw_url: str) -> BatchOutcome:
        try:
            return BatchOutcome(input_url=raw_url, result=self.analyze(raw_url))
        except URLError as e:
            return BatchOutcome(input_url=raw_url, error=e)

    def analyze_batch(self, urls: Iterable[str], workers: Optional[int] = None) -> List[BatchOutcome]:
        """
        Classify many URLs across a thread pool.

        Input errors are collected per URL; outcomes keep input order.
        """
        urls = list(urls)
        workers = workers or self.settings.workers
        if workers <= 1 or len(urls) <= 1:
            return [self._analyze_outcome(url) for url in urls]

        with ThreadPoolExecutor(max_workers=min(workers, len(urls))) as executor:
            return list(executor.map(self._analyze_outcome, urls))
