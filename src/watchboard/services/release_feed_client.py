"""Release feed client using BeautifulSoup XML parsing."""

import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx
from bs4 import BeautifulSoup, Tag
from lxml import etree

from watchboard.config import settings
from watchboard.errors import ParseError, TransportError
from watchboard.schemas.release import LatestRelease

logger = logging.getLogger(__name__)

PUB_DATE_OFFSET = "+0000"
CATEGORY_SEPARATOR = " - "
EPISODE_PATTERN = re.compile(r"(\d+)(?:v\d+)? \(\d+p\)")
STRICT_PARSER = etree.XMLParser(recover=False, resolve_entities=False, no_network=True)


def title_key_from_category(category: str) -> str:
    """Merge key for a feed item: the category up to the first " - "."""
    return category.split(CATEGORY_SEPARATOR)[0]


def parse_pub_date(value: str) -> datetime:
    """Parse a feed pubDate such as "Mon, 02 Jan 2006 15:04:05 +0000".

    Month and weekday names are matched in English whatever the process locale.
    """
    value = value.strip()
    if not value.endswith(PUB_DATE_OFFSET):
        raise ValueError(f"pubDate {value!r} is not in UTC ({PUB_DATE_OFFSET})")
    return parsedate_to_datetime(value).replace(tzinfo=timezone.utc)


def parse_episode(title: str) -> int | None:
    """Extract the episode number from an item title like "Show - 05 (720p)"."""
    match = EPISODE_PATTERN.search(title)
    return int(match.group(1)) if match else None


class ReleaseFeedClient:
    """
    Client for the RSS release feed.

    Each <item> in the feed is one released file; its <category> names the show
    (e.g. "Sousou no Frieren - 720"), which is the only handle available for
    joining against the tracker.
    """

    def __init__(self, feed_url: str | None = None, timeout: float | None = None) -> None:
        self.feed_url = feed_url or settings.release_feed_url
        self.timeout = timeout if timeout is not None else settings.http_timeout

    async def fetch_latest(self) -> dict[str, LatestRelease]:
        """
        Fetch the feed and index the latest release per show.

        Returns:
            Mapping of title key to release; later items overwrite earlier ones

        Raises:
            TransportError: The feed could not be fetched
            ParseError: The document is not an RSS feed or an item is malformed
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(self.feed_url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Release feed request failed: {e}")
            raise TransportError(f"Could not fetch release feed: {e}") from e

        latest = self.parse_feed(response.text)
        logger.info(f"Release feed: {len(latest)} shows with recent releases")
        return latest

    def parse_feed(self, xml: str | bytes) -> dict[str, LatestRelease]:
        """Parse an RSS document into a title-key mapping. No partial results."""
        document = xml.encode("utf-8") if isinstance(xml, str) else xml
        # BeautifulSoup recovers from truncation, so reject malformed documents first
        try:
            etree.fromstring(document, parser=STRICT_PARSER)
        except etree.XMLSyntaxError as e:
            raise ParseError(f"Release feed is not well-formed XML: {e}") from e

        soup = BeautifulSoup(document, "xml")
        rss = soup.find("rss")
        channel = rss.find("channel") if isinstance(rss, Tag) else None
        if not isinstance(channel, Tag):
            raise ParseError("Release feed is not an RSS document")

        latest: dict[str, LatestRelease] = {}
        for item in channel.find_all("item"):
            release = self._parse_item(item)
            latest[release.title_key] = release
        return latest

    def _parse_item(self, item: Tag) -> LatestRelease:
        """Parse a single <item>; a missing or malformed pubDate is fatal."""
        title = self._get_text(item, "title")
        category = self._get_text(item, "category")

        pub_date = self._get_text(item, "pubDate")
        try:
            published_at = parse_pub_date(pub_date)
        except ValueError as e:
            raise ParseError(f"Invalid pubDate {pub_date!r} for {title!r}") from e

        return LatestRelease(
            title_key=title_key_from_category(category),
            title=title,
            link=self._get_text(item, "link"),
            category=category,
            published_at=published_at,
            episode=parse_episode(title),
        )

    @staticmethod
    def _get_text(item: Tag, name: str) -> str:
        tag = item.find(name)
        return tag.get_text(strip=True) if isinstance(tag, Tag) else ""
