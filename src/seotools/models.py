"""Data models shared by the SEO tools."""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Union


@dataclass
class RedirectStep:
    """One hop of a simulated rewrite chain."""

    input_path: str
    output_path: str
    matched: bool
    rule_description: str
    status_code: Optional[int] = None  # From an R=NNN flag


@dataclass
class ValidationResult:
    """A single validation message."""

    severity: str  # success/warning/error
    message: str


@dataclass
class HreflangEntry:
    """An hreflang alternate link."""

    language_code: str
    href: str


@dataclass
class FeedItem:
    """An RSS item or Atom entry, normalized."""

    title: str
    link: str
    description: str = ""
    published_at: str = ""
    author: str = ""


@dataclass
class Feed:
    """Parsed RSS/Atom feed with its validation outcome."""

    title: str
    description: str = ""
    link: str = ""
    items: List[FeedItem] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    feed_format: str = "unknown"  # rss/atom/unknown

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        data = asdict(self)
        data["is_valid"] = self.is_valid
        return data


@dataclass
class ComplianceCheck:
    """Outcome of one structural AMP predicate."""

    rule_name: str
    severity: str  # error/warning
    passed: bool
    message: str


@dataclass
class ComparisonResult:
    """One signal compared between the mobile and desktop documents."""

    category: str
    mobile: Union[str, int]
    desktop: Union[str, int]
    status: str  # match/mismatch/warning
    note: str


@dataclass(frozen=True)
class BotDefinition:
    """A crawler identified by a robots.txt user-agent token."""

    name: str
    user_agent: str


@dataclass
class BotAccessResult:
    """Whether robots.txt lets a given bot crawl the site."""

    bot_name: str
    user_agent_token: str
    allowed: bool
    reason: str


@dataclass
class FetchResult:
    """Body and metadata of a fetched remote document."""

    url: str
    content: str
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=dict)
    elapsed_ms: int = 0
