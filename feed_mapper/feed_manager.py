"""
Feed manager orchestration.

Coordinates the flow: load (parse) → apply (transform) → serialize → export
and holds the currently loaded feed for the UI collaborator.
"""

from enum import Enum
from typing import Any

from feed_mapper.codec import FeedWriterOptions, parse_feed, serialize_records
from feed_mapper.core.exceptions import NoDataError
from feed_mapper.core.models import (
    ExportArtifact,
    FeedData,
    LoadResult,
    ParsedFeed,
    Record,
    SchemaEntry,
)
from feed_mapper.core.rules import TransformEngine
from feed_mapper.export import ExportSink
from feed_mapper.observability import metrics
from feed_mapper.observability.logger import get_logger, log_operation
from feed_mapper.utils.validation import validate_file_name

logger = get_logger(__name__)

DEFAULT_EXPORT_FILE_NAME = "transformed.xml"


class FeedState(str, Enum):
    """Lifecycle of a feed manager."""

    EMPTY = "empty"
    LOADED = "loaded"
    TRANSFORMED = "transformed"


class FeedManager:
    """
    Holds one parsed feed and exposes its mapping lifecycle.

    Flow:
    1. load(xml_text): parse the document, replacing any previous feed
    2. apply(rules): transform the working records
    3. serialize(): write the working records back to XML
    4. export(file_name): serialize and hand the bytes to the export sink

    A manager instance is not safe for concurrent use; callers serialize
    their calls.
    """

    def __init__(
        self,
        export_sink: ExportSink | None = None,
        writer_options: FeedWriterOptions | None = None,
    ):
        """
        Initialize an empty feed manager.

        Args:
            export_sink: Collaborator receiving exported feeds
            writer_options: Wrapping document shape (defaults read from the environment)
        """
        self.export_sink = export_sink
        self.writer_options = writer_options or FeedWriterOptions.from_env()

        self._feed: ParsedFeed | None = None
        self._state = FeedState.EMPTY

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def records(self) -> list[Record]:
        return self._feed.records if self._feed else []

    @property
    def schema(self) -> list[SchemaEntry]:
        return self._feed.feed_schema if self._feed else []

    @property
    def field_names(self) -> list[str]:
        return self._feed.field_names if self._feed else []

    def _require_feed(self, operation: str) -> ParsedFeed:
        if self._feed is None:
            logger.warning("Operation requires a loaded feed", extra={"operation": operation})
            raise NoDataError(operation)
        return self._feed

    def load(self, xml_text: str | bytes) -> LoadResult:
        """
        Parse a feed document and make it the current feed.

        Args:
            xml_text: The XML document

        Returns:
            LoadResult with the schema, field names and item count

        Raises:
            ParseError: If the document is malformed or has no items; the
                        previously loaded feed is kept
        """
        feed = parse_feed(xml_text)

        self._feed = feed
        self._state = FeedState.LOADED

        return LoadResult(
            feed_schema=feed.feed_schema,
            field_names=feed.field_names,
            item_count=len(feed.records),
        )

    def apply(self, rules: list[Any]) -> FeedData:
        """
        Apply mapping rules to the working records.

        Args:
            rules: Rule models or dicts with a `type` key

        Returns:
            FeedData preview of the working records

        Raises:
            NoDataError: If no feed is loaded
        """
        feed = self._require_feed("apply mappings")

        if not rules:
            logger.debug("No mapping rules given, feed left unchanged")
            return self.get_data()

        TransformEngine(rules).apply(feed.records)
        self._state = FeedState.TRANSFORMED

        return self.get_data()

    def get_data(self) -> FeedData:
        """Preview of every record's current values plus the schema."""
        return FeedData(
            items=[record.to_dict() for record in self.records],
            feed_schema=self.schema,
        )

    def serialize(self) -> str:
        """
        Serialize the working records.

        Raises:
            NoDataError: If no feed is loaded
            SerializeError: If a field name or value cannot be written as XML
        """
        feed = self._require_feed("serialize feed")
        return serialize_records(feed.records, self.writer_options, feed.namespaces)

    def export(self, file_name: str = DEFAULT_EXPORT_FILE_NAME) -> Any:
        """
        Serialize the feed and hand it to the export sink.

        Args:
            file_name: Suggested file name for the saved feed

        Returns:
            Whatever the sink returns for the delivery

        Raises:
            NoDataError: If no feed is loaded
            ValueError: If no sink is configured or the file name is unsafe
        """
        self._require_feed("export feed")
        if self.export_sink is None:
            raise ValueError("No export sink configured")

        file_name = validate_file_name(file_name)
        artifact = ExportArtifact(
            file_name=file_name,
            content=self.serialize().encode("utf-8"),
        )

        with log_operation("Exporting feed", logger=logger, file_name=file_name, sink=self.export_sink.name) as op:
            result = self.export_sink.deliver(artifact)
            op.add(size_bytes=artifact.size)

        metrics.increment_counter(metrics.exports_total, sink=self.export_sink.name)
        return result

    def reset(self) -> None:
        """Drop the loaded feed."""
        self._feed = None
        self._state = FeedState.EMPTY
