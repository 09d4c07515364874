"""Generators for robots.txt, XML sitemaps and JSON-LD schema markup."""

import logging
from pathlib import Path

from seotools.generators.robots import RobotsConfig, RobotsRule, generate_robots_txt
from seotools.generators.schema import SCHEMA_TYPES, SchemaObject, build_schema
from seotools.generators.sitemap import (
    AlternateLink,
    ChangeFrequency,
    SitemapUrlEntry,
    generate_sitemap,
)

logger = logging.getLogger(__name__)


def write_artifact(content: str, path: str) -> Path:
    """Write a generated artifact to ``path``, creating parent directories.

    Returns:
        The path written
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote {len(content)} characters to {output_path}")
    return output_path


__all__ = [
    "RobotsConfig",
    "RobotsRule",
    "generate_robots_txt",
    "SCHEMA_TYPES",
    "SchemaObject",
    "build_schema",
    "AlternateLink",
    "ChangeFrequency",
    "SitemapUrlEntry",
    "generate_sitemap",
    "write_artifact",
]
