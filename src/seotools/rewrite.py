"""Apache-style rewrite rule evaluator.

Simulates the redirect chain a path would follow through the RewriteRule
lines of an .htaccess file. Only RewriteRule lines drive the output;
RewriteCond lines are recognised but not evaluated against server state
(host, HTTPS, file system), and the report says so in a warning.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from seotools.constants import (
    DEFAULT_REDIRECT_STATUS,
    MAX_REWRITE_ITERATIONS,
    NO_MATCH_DESCRIPTION,
    REWRITE_LAST_FLAGS,
)
from seotools.models import RedirectStep

logger = logging.getLogger(__name__)


# Long flag names accepted by mod_rewrite, mapped to their short form
FLAG_ALIASES = {
    'LAST': 'L',
    'REDIRECT': 'R',
    'NOCASE': 'NC',
    'QSAPPEND': 'QSA',
    'NOESCAPE': 'NE',
    'PASSTHROUGH': 'PT',
    'FORBIDDEN': 'F',
    'GONE': 'G',
}

BACKREFERENCE = re.compile(r'\$(\d)')


@dataclass
class RewriteDirective:
    """One tokenized line of rewrite configuration."""

    kind: str  # RewriteRule, RewriteCond, RewriteEngine, RewriteBase, ...
    arguments: List[str]
    line_number: int
    raw: str


@dataclass
class RewriteRule:
    """A compiled RewriteRule line."""

    pattern: re.Pattern
    replacement: str
    flags: dict = field(default_factory=dict)  # short flag name -> value or None
    negated: bool = False
    source: str = ""
    flags_text: str = ""
    line_number: int = 0

    @property
    def is_last(self) -> bool:
        return any(flag in REWRITE_LAST_FLAGS for flag in self.flags)

    @property
    def redirect_status(self) -> Optional[int]:
        if 'R' not in self.flags:
            return None
        value = self.flags['R']
        if value and value.isdigit():
            return int(value)
        return DEFAULT_REDIRECT_STATUS

    @property
    def description(self) -> str:
        text = f"RewriteRule {self.source} {self.replacement}"
        if self.flags_text:
            text += f" [{self.flags_text}]"
        return text


@dataclass
class RewriteReport:
    """Redirect chain plus what the simulation could not take into account."""

    input_path: str
    steps: List[RedirectStep] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    skipped_lines: List[int] = field(default_factory=list)
    condition_count: int = 0

    @property
    def final_path(self) -> str:
        return self.steps[-1].output_path if self.steps else self.input_path

    @property
    def matched(self) -> bool:
        return any(step.matched for step in self.steps)


def tokenize(rules_text: str) -> List[RewriteDirective]:
    """Split configuration text into directives, skipping blanks and comments."""
    directives = []
    for line_number, line in enumerate((rules_text or "").splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        parts = stripped.split()
        directives.append(RewriteDirective(
            kind=parts[0],
            arguments=parts[1:],
            line_number=line_number,
            raw=stripped,
        ))
    return directives


def _parse_flags(flags_text: str) -> dict:
    flags = {}
    for flag in flags_text.split(','):
        flag = flag.strip()
        if not flag:
            continue
        name, _, value = flag.partition('=')
        name = name.strip().upper()
        flags[FLAG_ALIASES.get(name, name)] = value.strip() or None
    return flags


def compile_rule(directive: RewriteDirective) -> Optional[RewriteRule]:
    """Compile a RewriteRule directive, or return None if it cannot be used."""
    if len(directive.arguments) < 2:
        return None

    source, replacement = directive.arguments[0], directive.arguments[1]
    flags_text = ""
    if len(directive.arguments) > 2:
        flags_arg = directive.arguments[2]
        if flags_arg.startswith('[') and flags_arg.endswith(']'):
            flags_text = flags_arg[1:-1]
    flags = _parse_flags(flags_text)

    negated = source.startswith('!')
    pattern_text = source[1:] if negated else source
    try:
        pattern = re.compile(pattern_text, re.IGNORECASE if 'NC' in flags else 0)
    except re.error as e:
        logger.debug(f"Skipping line {directive.line_number}, bad pattern {source!r}: {e}")
        return None

    return RewriteRule(
        pattern=pattern,
        replacement=replacement,
        flags=flags,
        negated=negated,
        source=source,
        flags_text=flags_text,
        line_number=directive.line_number,
    )


def parse_rules(rules_text: str) -> Tuple[List[RewriteRule], List[int], int]:
    """Parse rewrite configuration.

    Returns:
        Tuple of (rules in file order, line numbers of skipped RewriteRule
        lines, number of RewriteCond lines)
    """
    rules = []
    skipped = []
    conditions = 0

    for directive in tokenize(rules_text):
        if directive.kind == 'RewriteCond':
            conditions += 1
        elif directive.kind == 'RewriteRule':
            rule = compile_rule(directive)
            if rule is None:
                skipped.append(directive.line_number)
            else:
                rules.append(rule)

    return rules, skipped, conditions


class RewriteTester:
    """Runs a path through a rule set and records each rewrite."""

    def __init__(
        self,
        max_iterations: int = MAX_REWRITE_ITERATIONS,
        per_directory: bool = True,
    ):
        """Initialize the tester.

        Args:
            max_iterations: Cycle guard, the chain never exceeds this many steps
            per_directory: Match the way .htaccess does, with the leading slash
                removed from the path
        """
        self.max_iterations = max_iterations
        self.per_directory = per_directory

    def test(self, rules_text: str, input_path: str) -> RewriteReport:
        """Simulate the redirect chain for ``input_path``."""
        rules, skipped, conditions = parse_rules(rules_text)
        report = RewriteReport(
            input_path=input_path,
            skipped_lines=skipped,
            condition_count=conditions,
        )

        if conditions:
            report.warnings.append(
                f"{conditions} RewriteCond line(s) were not evaluated; "
                "rules are applied as if every condition matched"
            )
        for line_number in skipped:
            report.warnings.append(f"Line {line_number}: RewriteRule could not be parsed and was skipped")

        current = input_path
        for _ in range(self.max_iterations):
            rule, match = self._first_match(rules, current)
            if rule is None:
                break

            output = self._substitute(rule, match, current)
            report.steps.append(RedirectStep(
                input_path=current,
                output_path=output,
                matched=True,
                rule_description=rule.description,
                status_code=rule.redirect_status,
            ))
            current = output

            if rule.is_last:
                break

        if not report.steps:
            report.steps.append(RedirectStep(
                input_path=input_path,
                output_path=input_path,
                matched=False,
                rule_description=NO_MATCH_DESCRIPTION,
            ))

        logger.debug(
            f"Rewrite of {input_path!r}: {len(rules)} rules, "
            f"{len(report.steps)} steps, final {report.final_path!r}"
        )
        return report

    def _subject(self, path: str) -> str:
        if self.per_directory and path.startswith('/'):
            return path[1:]
        return path

    def _first_match(self, rules: List[RewriteRule], path: str):
        subject = self._subject(path)
        for rule in rules:
            match = rule.pattern.search(subject)
            if rule.negated:
                if match is None:
                    return rule, None
            elif match is not None:
                return rule, match
        return None, None

    @staticmethod
    def _substitute(rule: RewriteRule, match: Optional[re.Match], path: str) -> str:
        if rule.replacement == '-':
            return path

        def backreference(m: re.Match) -> str:
            index = int(m.group(1))
            if match is None or index > match.re.groups:
                return ""
            return match.group(index) or ""

        return BACKREFERENCE.sub(backreference, rule.replacement)


def evaluate(rules_text: str, input_path: str) -> List[RedirectStep]:
    """Evaluate rewrite rules against a path and return the redirect chain."""
    return RewriteTester().test(rules_text, input_path).steps
