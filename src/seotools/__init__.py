"""Standalone SEO analysis and generation utilities."""

__version__ = "0.1.0"

from seotools.rewrite import RewriteTester, evaluate
from seotools.hreflang import HreflangValidator
from seotools.feed_parser import FeedParser
from seotools.amp import AmpValidator
from seotools.mobile_first import MobileFirstAnalyzer, MobileFirstComparator
from seotools.bot_access import AI_BOTS, BotAccessChecker, check_access
from seotools.serp import simulate
from seotools.mobile_friendly import MobileFriendlyTester, evaluate_page
from seotools.fetch_render import snapshot
from seotools.local_search import build_search_url
from seotools.fetcher import PageFetcher
from seotools.models import (
    RedirectStep,
    ValidationResult,
    HreflangEntry,
    FeedItem,
    Feed,
    ComplianceCheck,
    ComparisonResult,
    BotDefinition,
    BotAccessResult,
    FetchResult,
)
from seotools.exceptions import SeoToolsError, FetchError
from seotools.config import settings

__all__ = [
    # Analyzers
    "RewriteTester",
    "evaluate",
    "HreflangValidator",
    "FeedParser",
    "AmpValidator",
    "MobileFirstAnalyzer",
    "MobileFirstComparator",
    "AI_BOTS",
    "BotAccessChecker",
    "check_access",
    "simulate",
    "MobileFriendlyTester",
    "evaluate_page",
    "snapshot",
    "build_search_url",
    "PageFetcher",
    # Models
    "RedirectStep",
    "ValidationResult",
    "HreflangEntry",
    "FeedItem",
    "Feed",
    "ComplianceCheck",
    "ComparisonResult",
    "BotDefinition",
    "BotAccessResult",
    "FetchResult",
    # Errors
    "SeoToolsError",
    "FetchError",
    "settings",
]
