"""robots.txt generator."""

from dataclasses import dataclass, field
from typing import List, Optional

from seotools.constants import ROBOTS_GENERATOR_AI_BOTS


@dataclass
class RobotsRule:
    """A user-agent group: who it applies to and which paths it covers."""

    user_agent: str = "*"
    disallow: List[str] = field(default_factory=list)
    allow: List[str] = field(default_factory=list)


@dataclass
class RobotsConfig:
    """Form state for the generator."""

    rules: List[RobotsRule] = field(default_factory=lambda: [
        RobotsRule(user_agent="*", disallow=["/admin/", "/private/"]),
    ])
    crawl_delay: Optional[str] = None
    block_ai_bots: bool = False
    sitemap_url: Optional[str] = None


def generate_robots_txt(config: RobotsConfig) -> str:
    """Render robots.txt.

    Each rule becomes one group (Crawl-delay repeated in every group), followed
    by the optional AI-bot block and a trailing Sitemap line.
    """
    lines = []

    for rule in config.rules:
        lines.append(f"User-agent: {rule.user_agent.strip() or '*'}")
        lines.extend(f"Disallow: {path.strip()}" for path in rule.disallow if path.strip())
        lines.extend(f"Allow: {path.strip()}" for path in rule.allow if path.strip())
        if config.crawl_delay:
            lines.append(f"Crawl-delay: {config.crawl_delay}")
        lines.append("")

    if config.block_ai_bots:
        for bot in ROBOTS_GENERATOR_AI_BOTS:
            lines.extend([f"User-agent: {bot}", "Disallow: /", ""])

    if config.sitemap_url:
        lines.append(f"Sitemap: {config.sitemap_url}")

    if not lines:
        return ""
    return "\n".join(lines) + "\n"
