"""
Export sinks receiving serialized feeds.

The feed manager hands each export to a sink together with a suggested file
name; the sink decides what "saving" means (writing to disk, returning the
bytes to a web layer, triggering a download).
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any

from feed_mapper.core.models import ExportArtifact
from feed_mapper.observability.logger import get_logger

logger = get_logger(__name__)


class ExportSink(ABC):
    """
    Abstract base class for export sinks.
    """

    name: str = "base"

    @abstractmethod
    def deliver(self, artifact: ExportArtifact) -> Any:
        """
        Deliver a serialized feed.

        Args:
            artifact: File name, content bytes and media type

        Returns:
            Sink-specific result (a path, a response object, ...)
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CallbackExportSink(ExportSink):
    """
    Hands the artifact to a callable supplied by the collaborator.

    Usage:
        sink = CallbackExportSink(lambda artifact: downloads.append(artifact))
    """

    name = "callback"

    def __init__(self, callback: Callable[[ExportArtifact], Any]):
        self.callback = callback

    def deliver(self, artifact: ExportArtifact) -> Any:
        return self.callback(artifact)


class FileExportSink(ExportSink):
    """
    Writes exported feeds into a directory.
    """

    name = "file"

    def __init__(self, directory: str | Path | None = None):
        """
        Initialize file sink.

        Args:
            directory: Target directory (defaults to env var FEED_EXPORT_DIR, then ".")
        """
        self.directory = Path(directory or os.getenv("FEED_EXPORT_DIR", "."))

    def deliver(self, artifact: ExportArtifact) -> Path:
        """
        Write the artifact to `<directory>/<file_name>`, replacing any existing file.

        Returns:
            Path of the written file
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / artifact.file_name
        path.write_bytes(artifact.content)

        logger.info(
            "Exported feed to file",
            extra={"path": str(path), "size_bytes": artifact.size},
        )
        return path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(directory={self.directory})"
