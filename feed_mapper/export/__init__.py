"""
Export sinks.
"""

from .sinks import CallbackExportSink, ExportSink, FileExportSink

__all__ = [
    "ExportSink",
    "CallbackExportSink",
    "FileExportSink",
]
