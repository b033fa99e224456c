"""
Heuristic URL rules.

Three independent checks, evaluated in a fixed order so the output is
deterministic:
1. blocklist_hit        (+70) host is in the blocklist or a subdomain of an entry
2. suspicious_tld       (+20) TLD is in a short list of abuse-heavy TLDs
3. path_has_login_like  (+10) path or query contains a login-style keyword
"""

from typing import List, Optional

from urwarden.schemas.result_schemas import NormalizedURL, Reason, RuleName
from urwarden.services.blocklist_service import BlocklistIndex

WEIGHT_BLOCKLIST_HIT = 70
WEIGHT_SUSPICIOUS_TLD = 20
WEIGHT_PATH_LOGIN_LIKE = 10

SUSPICIOUS_TLDS = frozenset({
    "xyz", "top", "click", "help", "shop",
    "live", "cam", "kim", "fit", "country",
})

# Order matters: the first keyword found is reported
LOGIN_LIKE_TOKENS = (
    "login", "signin", "verify", "update", "password", "passcode",
    "secure", "confirm", "invoice", "billing",
)


def path_has_login_like(path: str, query: str) -> Optional[str]:
    """Return the first login-style keyword found in path + query, if any."""
    target = (path or "").lower()
    if query:
        target += "?" + query.lower()

    for token in LOGIN_LIKE_TOKENS:
        if token in target:
            return token
    return None


class RuleEvaluator:
    """Applies the URL rules against one shared blocklist index."""

    def __init__(self, blocklist: Optional[BlocklistIndex] = None):
        self.blocklist = blocklist

    def check_blocklist(self, n: NormalizedURL) -> Optional[Reason]:
        if self.blocklist is None:
            return None
        matched, domain = self.blocklist.contains(n.host)
        if not matched:
            return None

        detail = domain
        if domain != n.host and n.host.endswith("." + domain):
            detail = f"matched subdomain of {domain}"
        return Reason(rule=RuleName.BLOCKLIST_HIT, weight=WEIGHT_BLOCKLIST_HIT, detail=detail)

    def check_suspicious_tld(self, n: NormalizedURL) -> Optional[Reason]:
        if n.tld.lower() not in SUSPICIOUS_TLDS:
            return None
        return Reason(rule=RuleName.SUSPICIOUS_TLD, weight=WEIGHT_SUSPICIOUS_TLD, detail=n.tld)

    def check_login_like(self, n: NormalizedURL) -> Optional[Reason]:
        matched = path_has_login_like(n.path, n.query)
        if matched is None:
            return None
        return Reason(
            rule=RuleName.PATH_HAS_LOGIN_LIKE,
            weight=WEIGHT_PATH_LOGIN_LIKE,
            detail=f"matched: {matched}",
        )

    def evaluate_all(self, n: NormalizedURL) -> List[Reason]:
        """
        Run every rule against a normalized URL.

        Returns:
            Triggered reasons in rule order (empty list when nothing fires)
        """
        reasons: List[Reason] = []
        for check in (self.check_blocklist, self.check_suspicious_tld, self.check_login_like):
            reason = check(n)
            if reason is not None:
                reasons.append(reason)
        return reasons
