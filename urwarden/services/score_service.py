"""
Score aggregation and labeling.
Sums rule weights and maps the total to benign / suspicious / malicious.
"""

from typing import Iterable, Optional, Tuple

from urwarden.exceptions import ConfigError
from urwarden.schemas.result_schemas import Label, Reason

DEFAULT_MALICIOUS_THRESHOLD = 70
DEFAULT_SUSPICIOUS_THRESHOLD = 30


class ScoreAggregator:
    def __init__(
        self,
        malicious_threshold: Optional[int] = None,
        suspicious_threshold: Optional[int] = None,
    ):
        self.malicious_threshold = (
            DEFAULT_MALICIOUS_THRESHOLD if malicious_threshold is None else malicious_threshold
        )
        self.suspicious_threshold = (
            DEFAULT_SUSPICIOUS_THRESHOLD if suspicious_threshold is None else suspicious_threshold
        )
        if self.suspicious_threshold > self.malicious_threshold:
            raise ConfigError(
                f"suspicious threshold {self.suspicious_threshold} is above "
                f"malicious threshold {self.malicious_threshold}"
            )

    @classmethod
    def from_settings(cls, settings) -> "ScoreAggregator":
        return cls(
            malicious_threshold=settings.malicious_threshold,
            suspicious_threshold=settings.suspicious_threshold,
        )

    def label_of(self, score: int) -> Label:
        """
        Derive the label from a score.

        - score >= malicious threshold  -> malicious
        - score >= suspicious threshold -> suspicious
        - otherwise                     -> benign
        """
        if score >= self.malicious_threshold:
            return Label.MALICIOUS
        elif score >= self.suspicious_threshold:
            return Label.SUSPICIOUS
        else:
            return Label.BENIGN

    def aggregate(self, reasons: Iterable[Reason]) -> Tuple[int, Label]:
        total = sum(reason.weight for reason in reasons)
        return total, self.label_of(total)


def aggregate(reasons: Iterable[Reason]) -> Tuple[int, Label]:
    """Aggregate with the default 70 / 30 thresholds."""
    return ScoreAggregator().aggregate(reasons)
