import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from features.common.exceptions.wind_exceptions import ArchiveNotFoundError
from core.config import settings

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ArchivePatterns:
    """File name conventions of the hourly wind archives."""
    data_file_prefix: str
    product_file: re.Pattern

    @classmethod
    def from_settings(cls) -> "ArchivePatterns":
        return cls(
            data_file_prefix=settings.data_file_prefix,
            product_file=re.compile(settings.product_file_pattern)
        )

    def data_file(self, station_id: str) -> re.Pattern:
        """Pattern of the archive name of one station."""
        return re.compile(self.data_file_prefix + re.escape(station_id))

class TokenType(str, Enum):
    START_TAG = "start_tag"
    TEXT = "text"

class ScanState(str, Enum):
    OUTSIDE_ANCHOR = "outside_anchor"
    INSIDE_ANCHOR = "inside_anchor"

# Strings that are markup rather than page text
_NON_TEXT = (Comment, Declaration, Doctype, ProcessingInstruction)

def iter_tokens(html: str) -> Iterator[Tuple[TokenType, str]]:
    """Yield start tags and text nodes of the page in document order."""
    soup = BeautifulSoup(html, "html.parser")
    for node in soup.descendants:
        if isinstance(node, Tag):
            yield TokenType.START_TAG, node.name
        elif isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT):
            yield TokenType.TEXT, str(node)

class ArchiveLocator:
    """Finds the archive file name of a station on the archive index page."""

    def __init__(self, patterns: ArchivePatterns):
        self.patterns = patterns

    def locate(self, station_id: str, index_html: str) -> str:
        pattern = self.patterns.data_file(station_id)
        state = ScanState.OUTSIDE_ANCHOR

        for token_type, data in iter_tokens(index_html):
            if token_type == TokenType.START_TAG:
                if data == "a":
                    state = ScanState.INSIDE_ANCHOR
                continue

            if state == ScanState.INSIDE_ANCHOR:
                if pattern.search(data):
                    file_name = data.strip()
                    logger.debug(f"Found archive {file_name} for station {station_id}")
                    return file_name
                state = ScanState.OUTSIDE_ANCHOR

        raise ArchiveNotFoundError(f"info file not found for station {station_id}")
