"""AI crawler access checker for robots.txt.

robots.txt is tokenized into typed directives, then walked with a single
"current user-agent" context: each ``User-agent:`` line replaces the context
and later ``Disallow:`` lines apply to it. Groups that list several user
agents in a row therefore only apply to the last one listed.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from seotools.constants import (
    AI_BOT_REGISTRY,
    REASON_EXPLICIT_BLOCK,
    REASON_NO_ROBOTS,
    REASON_NOT_BLOCKED,
    REASON_RULE_BLOCK,
)
from seotools.models import BotAccessResult, BotDefinition

logger = logging.getLogger(__name__)


AI_BOTS = [BotDefinition(name=name, user_agent=token) for name, token in AI_BOT_REGISTRY]


@dataclass
class RobotsDirective:
    """One ``field: value`` line of robots.txt."""

    field: str  # lower-cased, e.g. 'user-agent', 'disallow'
    value: str
    line_number: int


@dataclass
class DisallowRule:
    """A Disallow path with the user-agent context it was found under."""

    user_agent: str  # lower-cased
    path: str
    line_number: int


def tokenize(robots_txt: str) -> List[RobotsDirective]:
    """Split robots.txt into directives, dropping comments and malformed lines."""
    directives = []
    for line_number, line in enumerate((robots_txt or "").splitlines(), start=1):
        line = line.split('#', 1)[0].strip()
        if ':' not in line:
            continue
        name, value = line.split(':', 1)
        directives.append(RobotsDirective(
            field=name.strip().lower(),
            value=value.strip(),
            line_number=line_number,
        ))
    return directives


def disallow_rules(directives: Iterable[RobotsDirective]) -> List[DisallowRule]:
    """Attach each non-empty Disallow to the most recent User-agent."""
    rules = []
    current_agent = ""
    for directive in directives:
        if directive.field == 'user-agent':
            current_agent = directive.value.lower()
        elif directive.field == 'disallow' and directive.value:
            rules.append(DisallowRule(
                user_agent=current_agent,
                path=directive.value,
                line_number=directive.line_number,
            ))
    return rules


class BotAccessChecker:
    """Reports which known bots robots.txt blocks."""

    def __init__(self, bots: Optional[List[BotDefinition]] = None):
        self.bots = bots if bots is not None else AI_BOTS

    def check(self, robots_txt: Optional[str]) -> List[BotAccessResult]:
        if robots_txt is None:
            return [
                BotAccessResult(bot.name, bot.user_agent, True, REASON_NO_ROBOTS)
                for bot in self.bots
            ]

        rules = disallow_rules(tokenize(robots_txt))
        results = [self._check_bot(bot, rules) for bot in self.bots]

        logger.debug(
            f"Checked {len(results)} bots against {len(rules)} disallow rules: "
            f"{sum(1 for r in results if not r.allowed)} blocked"
        )
        return results

    @staticmethod
    def _check_bot(bot: BotDefinition, rules: List[DisallowRule]) -> BotAccessResult:
        token = bot.user_agent.lower()
        names = {token, bot.name.lower()}

        explicit = any(r.user_agent == token and r.path == '/' for r in rules)
        if explicit:
            return BotAccessResult(bot.name, bot.user_agent, False, REASON_EXPLICIT_BLOCK)

        if any(r.user_agent in names for r in rules):
            return BotAccessResult(bot.name, bot.user_agent, False, REASON_RULE_BLOCK)

        return BotAccessResult(bot.name, bot.user_agent, True, REASON_NOT_BLOCKED)


def check_access(
    robots_txt: Optional[str],
    bots: Optional[List[BotDefinition]] = None,
) -> List[BotAccessResult]:
    """Report allow/block status for each bot. ``None`` means no robots.txt exists."""
    return BotAccessChecker(bots).check(robots_txt)
