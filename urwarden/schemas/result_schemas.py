from datetime import datetime
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class RuleName(str, Enum):
    BLOCKLIST_HIT = "blocklist_hit"
    SUSPICIOUS_TLD = "suspicious_tld"
    PATH_HAS_LOGIN_LIKE = "path_has_login_like"


class Label(str, Enum):
    BENIGN = "benign"
    SUSPICIOUS = "suspicious"
    MALICIOUS = "malicious"


class NormalizedURL(BaseModel):
    """URL split into the parts the rules look at."""
    model_config = ConfigDict(frozen=True)

    scheme: str  # http | https
    host: str    # lowercase, no leading/trailing dots
    tld: str     # text after the last dot, or the whole host
    path: str    # percent-escaped
    query: str   # raw query string


class Reason(BaseModel):
    """Single triggered rule and its score contribution."""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    rule: RuleName
    weight: int
    detail: str


class Result(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    input_url: str
    normalized: NormalizedURL
    score: int
    label: Label
    reasons: Tuple[Reason, ...] = ()
    timestamp: datetime
