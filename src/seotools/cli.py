"""Command-line interface for the SEO toolbox."""

import argparse
import json
import sys
from dataclasses import asdict, is_dataclass
from datetime import date

from seotools.amp import AmpValidator
from seotools.bot_access import check_access
from seotools.config import AnalysisThresholds, settings
from seotools.exceptions import FetchError, SeoToolsError
from seotools.feed_parser import FeedParser
from seotools.fetch_render import snapshot
from seotools.fetcher import PageFetcher, robots_url
from seotools.generators import (
    AlternateLink,
    RobotsConfig,
    RobotsRule,
    SitemapUrlEntry,
    build_schema,
    generate_robots_txt,
    generate_sitemap,
    write_artifact,
)
from seotools.generators.schema import SCHEMA_TYPES
from seotools.hreflang import HreflangValidator
from seotools.local_search import LOCATIONS, build_search_url
from seotools.logging_config import setup_logging
from seotools.mobile_first import MobileFirstAnalyzer, MobileFirstComparator
from seotools.mobile_friendly import MobileFriendlyTester
from seotools.prerender import check as prerender_check
from seotools.rewrite import RewriteTester
from seotools.serp import simulate

ICONS = {
    "success": "✅", "pass": "✅", "match": "✅", True: "✅",
    "warning": "⚠️ ", "mismatch": "❌",
    "error": "❌", "fail": "❌", False: "❌",
}


def _to_jsonable(value):
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _read_file(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def read_input(args) -> str:
    """Document text from --url (fetched), --file, or stdin."""
    if getattr(args, "url", None):
        return PageFetcher().fetch(args.url).content
    return _read_file(getattr(args, "file", None) or "-")


def emit(args, data, print_text):
    """Print ``data`` as JSON or through ``print_text``, or write it to --output-file."""
    if args.output == "json":
        output = json.dumps(_to_jsonable(data), indent=2, default=str, ensure_ascii=False)
        if args.output_file:
            write_artifact(output, args.output_file)
            print(f"Results written to {args.output_file}")
        else:
            print(output)
    else:
        print_text(data)


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(title)
    print(f"{'=' * 60}")


# =============================================================================
# Analyzer commands
# =============================================================================

def rewrite_command(args):
    """Simulate rewrite rules against one or more paths."""
    rules_text = _read_file(args.rules)
    tester = RewriteTester(max_iterations=args.max_iterations)
    reports = [tester.test(rules_text, path) for path in args.paths]

    def print_text(reports):
        for report in reports:
            print_header(f"Rewrite chain for: {report.input_path}")
            for number, step in enumerate(report.steps, start=1):
                status = f" [{step.status_code}]" if step.status_code else ""
                print(f"  {number}. {step.input_path} -> {step.output_path}{status}")
                print(f"     {step.rule_description}")
            print(f"\nFinal path: {report.final_path}")
            for warning in report.warnings:
                print(f"{ICONS['warning']} {warning}")

    emit(args, [
        {
            "input_path": r.input_path,
            "final_path": r.final_path,
            "matched": r.matched,
            "steps": _to_jsonable(r.steps),
            "warnings": r.warnings,
            "skipped_lines": r.skipped_lines,
        }
        for r in reports
    ] if args.output == "json" else reports, print_text)


def hreflang_command(args):
    """Validate hreflang annotations."""
    report = HreflangValidator().validate(read_input(args))

    def print_text(report):
        print_header(f"Hreflang: {len(report.entries)} tags found")
        for entry in report.entries:
            print(f"  {entry.language_code:<10} {entry.href}")
        print()
        for result in report.results:
            print(f"{ICONS[result.severity]} {result.message}")

    emit(args, {
        "is_valid": report.is_valid,
        "entries": _to_jsonable(report.entries),
        "results": _to_jsonable(report.results),
    } if args.output == "json" else report, print_text)


def feed_command(args):
    """Parse and validate an RSS or Atom feed."""
    feed = FeedParser().parse(read_input(args))

    def print_text(feed):
        print_header(f"{feed.title} ({feed.feed_format})")
        if feed.description:
            print(feed.description)
        print(f"\n{len(feed.items)} items")
        for item in feed.items:
            print(f"  • {item.title}")
            if item.link:
                print(f"    {item.link}")
        print()
        if feed.is_valid:
            print(f"{ICONS['success']} Feed is valid")
        for error in feed.errors:
            print(f"{ICONS['error']} {error}")

    emit(args, feed.to_dict() if args.output == "json" else feed, print_text)


def amp_command(args):
    """Check a page against the AMP structural rules."""
    report = AmpValidator().check(read_input(args))

    def print_text(report):
        print_header(f"AMP: {report.error_count} errors, {report.warning_count} warnings")
        for check in report.checks:
            icon = ICONS[True] if check.passed else ICONS[check.severity]
            print(f"{icon} {check.rule_name}: {check.message}")

    emit(args, {
        "is_valid": report.is_valid,
        "error_count": report.error_count,
        "warning_count": report.warning_count,
        "checks": _to_jsonable(report.checks),
    } if args.output == "json" else report, print_text)


def mobile_first_command(args):
    """Compare the mobile and desktop renditions of a page."""
    if args.url:
        comparator = MobileFirstComparator(args.thresholds)
        results = MobileFirstAnalyzer(comparator=comparator).analyze_url(args.url)
    elif args.mobile and args.desktop:
        results = MobileFirstComparator(args.thresholds).compare(
            _read_file(args.mobile), _read_file(args.desktop)
        )
    else:
        print("Error: provide --url, or both --mobile and --desktop files")
        sys.exit(1)

    def print_text(results):
        print_header("Mobile-first comparison")
        for result in results:
            print(f"{ICONS[result.status]} {result.category}: "
                  f"mobile={result.mobile} desktop={result.desktop} ({result.note})")

    emit(args, results, print_text)


def bots_command(args):
    """Report which AI crawlers robots.txt blocks."""
    if args.url:
        try:
            robots_txt = PageFetcher().fetch(robots_url(args.url)).content
        except FetchError as e:
            if e.status_code != 404:
                raise
            robots_txt = None
    else:
        robots_txt = _read_file(args.file or "-")

    results = check_access(robots_txt)

    def print_text(results):
        blocked = sum(1 for r in results if not r.allowed)
        print_header(f"AI bot access: {blocked}/{len(results)} blocked")
        for result in results:
            state = "blocked" if not result.allowed else "allowed"
            print(f"  {result.bot_name:<26} {state:<8} {result.reason}")

    emit(args, results, print_text)


def serp_command(args):
    """Preview a search result snippet."""
    preview = simulate(
        args.title, args.url, args.description,
        device=args.device, thresholds=args.thresholds,
    )

    def print_text(preview):
        print_header(f"SERP preview ({preview.device})")
        print(preview.display_url)
        print(preview.display_title)
        print(preview.display_description)
        print(f"\nTitle: {preview.title_length} chars ({preview.title_status})")
        print(f"Description: {preview.description_length} chars ({preview.description_status})")

    emit(args, preview, print_text)


def mobile_friendly_command(args):
    """Run the mobile-friendly test over several URLs."""
    results = MobileFriendlyTester(thresholds=args.thresholds).run(args.urls)

    def print_text(results):
        passed = sum(1 for r in results if r.status == "pass")
        print_header(f"Mobile-friendly: {passed}/{len(results)} passed")
        for result in results:
            print(f"{ICONS.get(result.status, '')} {result.url} ({result.status})")
            for issue in result.issues:
                print(f"    • {issue}")

    emit(args, results, print_text)


def prerender_command(args):
    """Check whether a page is served pre-rendered."""
    results = prerender_check(read_input(args), args.thresholds)

    def print_text(results):
        print_header("Pre-rendering test")
        for result in results:
            print(f"{ICONS[result.status]} {result.check}: {result.details}")

    emit(args, results, print_text)


def fetch_command(args):
    """Show how a crawler sees a page."""
    page = PageFetcher().fetch(args.url_arg)
    result = snapshot(page)

    def print_text(result):
        print_header(f"Fetch & render: {result.url}")
        print(f"Status: {result.status_code}  Load time: {result.load_time_ms} ms")
        print(f"Title: {result.title}")
        print(f"Meta description: {result.meta_description}")
        for h1 in result.h1_tags:
            print(f"H1: {h1}")
        print(f"\nLinks ({len(result.links)}):")
        for link in result.links:
            print(f"  • {link.text or '(no text)'} -> {link.href}")
        print(f"\nImages ({len(result.images)}):")
        for image in result.images:
            print(f"  • {image.src} alt={image.alt!r}")

    emit(args, result, print_text)


def local_search_command(args):
    """Build a localized Google search URL."""
    if args.list_locations:
        for location in LOCATIONS:
            print(f"{location.name:<22} {location.code}")
        return
    print(build_search_url(args.query or "", location=args.location))


# =============================================================================
# Generator commands
# =============================================================================

def _write_or_print(args, content: str):
    if args.output_file:
        write_artifact(content, args.output_file)
        print(f"Written to {args.output_file}")
    else:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")


def robots_command(args):
    """Generate robots.txt."""
    config = RobotsConfig(
        rules=[RobotsRule(
            user_agent=args.user_agent,
            disallow=args.disallow or [],
            allow=args.allow or [],
        )],
        crawl_delay=args.crawl_delay,
        block_ai_bots=args.block_ai_bots,
        sitemap_url=args.sitemap,
    )
    _write_or_print(args, generate_robots_txt(config))


def _parse_sitemap_line(line: str, args) -> SitemapUrlEntry:
    """``<url> [lang=url ...]``"""
    location, *alternates = line.split()
    return SitemapUrlEntry(
        location=location,
        last_modified=date.fromisoformat(args.lastmod) if args.lastmod else date.today(),
        change_frequency=args.changefreq,
        priority=args.priority,
        alternates=[
            AlternateLink(*alternate.split("=", 1))
            for alternate in alternates if "=" in alternate
        ],
    )


def sitemap_command(args):
    """Generate an XML sitemap."""
    lines = list(args.urls)
    if args.urls_file:
        lines.extend(_read_file(args.urls_file).splitlines())
    entries = [_parse_sitemap_line(line, args) for line in lines if line.strip()]
    _write_or_print(args, generate_sitemap(entries, include_hreflang=args.hreflang))


def schema_command(args):
    """Generate JSON-LD schema markup."""
    fields = {}
    for pair in args.field or []:
        key, _, value = pair.partition("=")
        fields[key.strip()] = value.replace("\\n", "\n")
    schema = build_schema(args.type, **fields)
    content = schema.to_script_tag() if args.script_tag else schema.to_json()
    _write_or_print(args, content)


# =============================================================================
# Parser
# =============================================================================

def _add_output_arguments(parser):
    parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )


def _add_input_arguments(parser, what: str = "HTML"):
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", "-i", help=f"Read {what} from file ('-' for stdin, the default)")
    source.add_argument("--url", "-u", help=f"Fetch {what} from URL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SEO Toolbox - Validate, simulate and generate SEO artifacts"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL.upper(),
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )
    parser.add_argument(
        "--config",
        help="JSON file with analysis thresholds (SEOTOOLS_THRESHOLD_* variables override it)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    rewrite_parser = subparsers.add_parser("rewrite", help="Test .htaccess rewrite rules.")
    rewrite_parser.add_argument("paths", nargs="+", help="Request paths to run through the rules")
    rewrite_parser.add_argument("--rules", "-r", required=True, help="Rules file ('-' for stdin)")
    rewrite_parser.add_argument(
        "--max-iterations",
        type=int,
        default=10,
        help="Maximum rewrite steps (default: 10)",
    )
    _add_output_arguments(rewrite_parser)
    rewrite_parser.set_defaults(func=rewrite_command)

    hreflang_parser = subparsers.add_parser("hreflang", help="Validate hreflang tags.")
    _add_input_arguments(hreflang_parser)
    _add_output_arguments(hreflang_parser)
    hreflang_parser.set_defaults(func=hreflang_command)

    feed_parser = subparsers.add_parser("feed", help="Parse and validate an RSS/Atom feed.")
    _add_input_arguments(feed_parser, what="feed XML")
    _add_output_arguments(feed_parser)
    feed_parser.set_defaults(func=feed_command)

    amp_parser = subparsers.add_parser("amp", help="Check AMP compliance.")
    _add_input_arguments(amp_parser)
    _add_output_arguments(amp_parser)
    amp_parser.set_defaults(func=amp_command)

    mobile_first_parser = subparsers.add_parser(
        "mobile-first", help="Compare mobile and desktop renditions."
    )
    mobile_first_parser.add_argument("--url", "-u", help="Fetch the page with mobile and desktop user agents")
    mobile_first_parser.add_argument("--mobile", help="Mobile HTML file")
    mobile_first_parser.add_argument("--desktop", help="Desktop HTML file")
    _add_output_arguments(mobile_first_parser)
    mobile_first_parser.set_defaults(func=mobile_first_command)

    bots_parser = subparsers.add_parser("bots", help="Check AI crawler access in robots.txt.")
    bots_source = bots_parser.add_mutually_exclusive_group()
    bots_source.add_argument("--file", "-i", help="Read robots.txt from file ('-' for stdin, the default)")
    bots_source.add_argument("--url", "-u", help="Site URL; its /robots.txt is fetched")
    _add_output_arguments(bots_parser)
    bots_parser.set_defaults(func=bots_command)

    robots_parser = subparsers.add_parser("robots", help="Generate robots.txt.")
    robots_parser.add_argument("--user-agent", default="*", help="User agent (default: *)")
    robots_parser.add_argument("--disallow", action="append", help="Disallowed path (repeatable)")
    robots_parser.add_argument("--allow", action="append", help="Allowed path (repeatable)")
    robots_parser.add_argument("--crawl-delay", help="Crawl-delay in seconds")
    robots_parser.add_argument("--block-ai-bots", action="store_true", help="Block known AI crawlers")
    robots_parser.add_argument("--sitemap", help="Sitemap URL")
    robots_parser.add_argument("--output-file", "-f", help="Write robots.txt to file")
    robots_parser.set_defaults(func=robots_command)

    sitemap_parser = subparsers.add_parser("sitemap", help="Generate an XML sitemap.")
    sitemap_parser.add_argument("urls", nargs="*", help="Page URLs")
    sitemap_parser.add_argument(
        "--urls-file",
        help="File with one '<url> [lang=url ...]' entry per line",
    )
    sitemap_parser.add_argument(
        "--changefreq",
        choices=["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"],
        default="weekly",
        help="Change frequency (default: weekly)",
    )
    sitemap_parser.add_argument("--priority", type=float, default=0.8, help="Priority (default: 0.8)")
    sitemap_parser.add_argument("--lastmod", help="Last modified date, YYYY-MM-DD (default: today)")
    sitemap_parser.add_argument("--hreflang", action="store_true", help="Emit hreflang alternates")
    sitemap_parser.add_argument("--output-file", "-f", help="Write sitemap.xml to file")
    sitemap_parser.set_defaults(func=sitemap_command)

    schema_parser = subparsers.add_parser("schema", help="Generate JSON-LD schema markup.")
    schema_parser.add_argument("type", choices=list(SCHEMA_TYPES), help="Schema type")
    schema_parser.add_argument(
        "--field",
        action="append",
        help="Field as key=value (repeatable; '\\n' in values is a newline)",
    )
    schema_parser.add_argument("--script-tag", action="store_true", help="Wrap in a <script> tag")
    schema_parser.add_argument("--output-file", "-f", help="Write markup to file")
    schema_parser.set_defaults(func=schema_command)

    serp_parser = subparsers.add_parser("serp", help="Preview a search result snippet.")
    serp_parser.add_argument("--title", "-t", default="", help="Page title")
    serp_parser.add_argument("--url", "-u", default="", help="Page URL")
    serp_parser.add_argument("--description", "-d", default="", help="Meta description")
    serp_parser.add_argument("--device", choices=["desktop", "mobile"], default="desktop")
    _add_output_arguments(serp_parser)
    serp_parser.set_defaults(func=serp_command)

    mobile_friendly_parser = subparsers.add_parser(
        "mobile-friendly", help="Test URLs for mobile usability issues."
    )
    mobile_friendly_parser.add_argument("urls", nargs="+", help="URLs to test")
    _add_output_arguments(mobile_friendly_parser)
    mobile_friendly_parser.set_defaults(func=mobile_friendly_command)

    prerender_parser = subparsers.add_parser("prerender", help="Check pre-rendering.")
    _add_input_arguments(prerender_parser)
    _add_output_arguments(prerender_parser)
    prerender_parser.set_defaults(func=prerender_command)

    fetch_parser = subparsers.add_parser("fetch", help="Fetch a page and show what crawlers see.")
    fetch_parser.add_argument("url_arg", metavar="url", help="URL to fetch")
    _add_output_arguments(fetch_parser)
    fetch_parser.set_defaults(func=fetch_command)

    local_search_parser = subparsers.add_parser(
        "local-search", help="Build a localized Google search URL."
    )
    local_search_parser.add_argument("query", nargs="?", help="Search query")
    local_search_parser.add_argument("--location", "-l", help="Location preset name, e.g. 'London, UK'")
    local_search_parser.add_argument(
        "--list-locations",
        action="store_true",
        help="List the location presets",
    )
    local_search_parser.set_defaults(func=local_search_command)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging based on flags
    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.thresholds = AnalysisThresholds.load(args.config)
        args.func(args)
    except (SeoToolsError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
