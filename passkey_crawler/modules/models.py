from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, List, Dict


class SignalMethod(Enum):

    API_USAGE = "WebAuthn API usage"
    KEYWORDS = "passkey keywords"
    UI_ELEMENTS = "passkey UI elements"
    NETWORK = "WebAuthn network requests"

    @property
    def label(self) -> str:
        return self.value


class Stage(Enum):

    MAIN_PAGE = "main page"
    LOGIN_PAGE = "login page"
    POST_EMAIL = "after email entry"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Candidate:
    query: str
    urls: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"query": self.query, "urls": list(self.urls)}


@dataclass(frozen=True)
class Signal:
    method: SignalMethod
    found: bool
    detail: str = ""

    def to_dict(self) -> dict:
        return {"method": self.method.name, "found": self.found, "detail": self.detail}


@dataclass(frozen=True)
class StageResult:
    """ Evidence gathered at one point of the navigation chain.
        signal is the first positive page-level signal or None if every check was negative.
    """
    stage: Stage
    signal: Optional[Signal] = None
    url: str = ""
    title: str = ""

    @property
    def positive(self) -> bool:
        return self.signal is not None and self.signal.found

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.name,
            "signal": self.signal.to_dict() if self.signal else None,
            "url": self.url,
            "title": self.title
        }


@dataclass(frozen=True)
class Verdict:
    url: str
    has_passkey: bool
    method: Optional[str] = None
    title: str = ""
    description: str = ""
    found_at_url: Optional[str] = None
    error: Optional[str] = None
    detail: str = ""
    stages: Tuple[StageResult, ...] = ()

    @staticmethod
    def failed(url: str, error: str) -> "Verdict":
        return Verdict(
            url=url,
            has_passkey=False,
            description="Site could not be analyzed",
            error=error
        )

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "hasPasskey": self.has_passkey,
            "method": self.method,
            "title": self.title,
            "description": self.description,
            "foundAtUrl": self.found_at_url,
            "error": self.error,
            "detail": self.detail,
            "stages": [s.to_dict() for s in self.stages]
        }


@dataclass
class BatchReport:
    """ Verdicts of a batch grouped by site, one site per query. A site has passkey support
        if any of its candidate urls has. Site totals count every query once, url totals
        count every candidate url tried.
    """
    sites: Dict[str, List[Verdict]] = field(default_factory=dict)

    def add(self, verdict: Verdict, site: Optional[str] = None):
        self.sites.setdefault(site if site is not None else verdict.url, []).append(verdict)

    @property
    def results(self) -> List[Verdict]:
        return [v for verdicts in self.sites.values() for v in verdicts]

    def site_has_passkey(self, site: str) -> bool:
        return any(v.has_passkey for v in self.sites.get(site, []))

    @property
    def tested(self) -> int:
        return len(self.sites)

    @property
    def with_passkey(self) -> int:
        return len([s for s in self.sites if self.site_has_passkey(s)])

    @property
    def without_passkey(self) -> int:
        return self.tested - self.with_passkey

    @property
    def success_rate(self) -> float:
        if not self.tested:
            return 0.0
        return round(self.with_passkey / self.tested * 100, 1)

    @property
    def urls_tested(self) -> int:
        return len(self.results)

    @property
    def urls_with_passkey(self) -> int:
        return len([r for r in self.results if r.has_passkey])

    @property
    def totals(self) -> dict:
        return {
            "tested": self.tested,
            "withPasskey": self.with_passkey,
            "withoutPasskey": self.without_passkey
        }

    @property
    def url_totals(self) -> dict:
        return {
            "tested": self.urls_tested,
            "withPasskey": self.urls_with_passkey,
            "withoutPasskey": self.urls_tested - self.urls_with_passkey
        }

    def to_dict(self) -> dict:
        return {
            "sites": [
                {"site": s, "hasPasskey": self.site_has_passkey(s), "results": [v.to_dict() for v in verdicts]}
                for s, verdicts in self.sites.items()
            ],
            "totals": self.totals,
            "urlTotals": self.url_totals,
            "successRate": self.success_rate
        }
