"""SERP snippet simulator.

Shows how a title, URL and meta description would be cut down on a desktop or
mobile results page, and rates each text's length.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from seotools.config import AnalysisThresholds, default_thresholds
from seotools.constants import (
    ELLIPSIS,
    STATUS_EMPTY,
    STATUS_GOOD,
    STATUS_TOO_LONG,
    STATUS_TOO_SHORT,
)

DEVICES = ("desktop", "mobile")


@dataclass
class SerpPreview:
    """What a search result would display."""

    display_title: str
    display_url: str
    display_description: str
    title_status: str
    description_status: str
    title_length: int
    description_length: int
    device: str = "desktop"


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters plus an ellipsis when longer."""
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def length_status(length: int, minimum: int, maximum: int) -> str:
    if length == 0:
        return STATUS_EMPTY
    if length < minimum:
        return STATUS_TOO_SHORT
    if length <= maximum:
        return STATUS_GOOD
    return STATUS_TOO_LONG


def display_url(url: str) -> str:
    """Host plus path, or the raw input when it is not an absolute URL."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    if not parsed.scheme or not parsed.hostname:
        return url
    return f"{parsed.hostname}{parsed.path}"


def simulate(
    title: str,
    url: str,
    description: str,
    device: str = "desktop",
    thresholds: Optional[AnalysisThresholds] = None,
) -> SerpPreview:
    """Build the SERP preview for one device.

    Raises:
        ValueError: If ``device`` is not 'desktop' or 'mobile'
    """
    if device not in DEVICES:
        raise ValueError(f"device must be one of {DEVICES}, got {device!r}")
    thresholds = thresholds or default_thresholds

    if device == "mobile":
        title_chars = thresholds.mobile_title_chars
        description_chars = thresholds.mobile_description_chars
    else:
        title_chars = thresholds.desktop_title_chars
        description_chars = thresholds.desktop_description_chars

    title = title or ""
    description = description or ""

    return SerpPreview(
        display_title=truncate(title, title_chars),
        display_url=display_url(url or ""),
        display_description=truncate(description, description_chars),
        title_status=length_status(len(title), thresholds.title_min, thresholds.title_max),
        description_status=length_status(
            len(description), thresholds.description_min, thresholds.description_max
        ),
        title_length=len(title),
        description_length=len(description),
        device=device,
    )
