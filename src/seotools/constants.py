# src/seotools/constants.py
"""Centralized constants for the SEO toolbox.

This module contains fixed strings, registries and limits that are used
across multiple modules. For user-configurable thresholds, see config.py
and AnalysisThresholds.
"""

# =============================================================================
# Rewrite Engine Constants
# =============================================================================

# Maximum rewrite passes before the chain is cut (cycle guard)
MAX_REWRITE_ITERATIONS = 10

# Flags that stop rewriting after the matching rule
REWRITE_LAST_FLAGS = frozenset({"L", "END"})

# Status code used for a bare [R] flag
DEFAULT_REDIRECT_STATUS = 302

# Description used for the single step emitted when nothing matched
NO_MATCH_DESCRIPTION = "No matching rules"


# =============================================================================
# Hreflang Constants
# =============================================================================

X_DEFAULT = "x-default"

# ISO 639-1 language with optional ISO 3166-1 region
HREFLANG_CODE_PATTERN = r"^[a-z]{2}(-[a-z]{2})?$"


# =============================================================================
# Feed Constants
# =============================================================================

UNTITLED_FEED = "Untitled Feed"
UNTITLED_ITEM = "Untitled"

# Items kept from a feed, regardless of its size
MAX_FEED_ITEMS = 20

# Characters of description kept for display
FEED_DESCRIPTION_DISPLAY_CHARS = 200


# =============================================================================
# AMP Constants
# =============================================================================

AMP_RUNTIME_URL = "https://cdn.ampproject.org/v0.js"
AMP_CDN_HOST = "cdn.ampproject.org"

# Script types AMP allows inline (data, not code)
AMP_ALLOWED_SCRIPT_TYPES = frozenset({
    "application/ld+json",
    "application/json",
    "text/plain",
})


# =============================================================================
# AI Bot Constants
# =============================================================================

# (display name, user-agent token) for known AI crawlers
AI_BOT_REGISTRY = [
    ("GPTBot (OpenAI)", "GPTBot"),
    ("ChatGPT-User", "ChatGPT-User"),
    ("Google-Extended", "Google-Extended"),
    ("CCBot (Common Crawl)", "CCBot"),
    ("anthropic-ai (Claude)", "anthropic-ai"),
    ("Claude-Web", "Claude-Web"),
    ("Bytespider (ByteDance)", "Bytespider"),
    ("Applebot-Extended", "Applebot-Extended"),
    ("PerplexityBot", "PerplexityBot"),
    ("Cohere-ai", "cohere-ai"),
]

# Bots emitted by the robots.txt generator's "block AI bots" option
ROBOTS_GENERATOR_AI_BOTS = [
    "GPTBot",
    "ChatGPT-User",
    "CCBot",
    "anthropic-ai",
    "Claude-Web",
    "Google-Extended",
]

REASON_NO_ROBOTS = "No robots.txt found - all bots allowed by default"
REASON_EXPLICIT_BLOCK = "Explicitly blocked in robots.txt"
REASON_RULE_BLOCK = "Blocked by rule"
REASON_NOT_BLOCKED = "No blocking rules found"


# =============================================================================
# Sitemap / Schema Constants
# =============================================================================

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"

SCHEMA_CONTEXT = "https://schema.org"


# =============================================================================
# SERP Constants
# =============================================================================

ELLIPSIS = "..."

STATUS_EMPTY = "Empty"
STATUS_TOO_SHORT = "Too Short"
STATUS_GOOD = "Good"
STATUS_TOO_LONG = "Too Long"


# =============================================================================
# Comparator Constants
# =============================================================================

# Characters of title shown in comparison rows
COMPARISON_TITLE_CHARS = 50


# =============================================================================
# Fetch / Render Constants
# =============================================================================

# Links and images listed in a render snapshot
SNAPSHOT_SAMPLE_LIMIT = 20

# Characters of anchor text kept per link in a snapshot
SNAPSHOT_LINK_TEXT_CHARS = 50

# Markers of client-side rendered single page apps
SPA_ROOT_MARKERS = ['__NEXT_DATA__', 'id="root"', 'id="app"']


# =============================================================================
# Local Search Constants
# =============================================================================

GOOGLE_SEARCH_URL = "https://www.google.com/search"

# (display name, country, gl code)
LOCATION_PRESETS = [
    ("New York, US", "United States", "us"),
    ("Los Angeles, US", "United States", "us"),
    ("Chicago, US", "United States", "us"),
    ("London, UK", "United Kingdom", "uk"),
    ("Paris, France", "France", "fr"),
    ("Berlin, Germany", "Germany", "de"),
    ("Toronto, Canada", "Canada", "ca"),
    ("Sydney, Australia", "Australia", "au"),
    ("Tokyo, Japan", "Japan", "jp"),
    ("Mumbai, India", "India", "in"),
    ("São Paulo, Brazil", "Brazil", "br"),
    ("Mexico City, Mexico", "Mexico", "mx"),
]
