"""Exporter implementations for KeyID workflow traces."""

from .base import Exporter
from .memory import InMemoryExporter

__all__ = ["Exporter", "InMemoryExporter", "PostgresExporter", "create_exporter_from_env"]


def __getattr__(name: str):
    if name == "PostgresExporter":
        from .postgres import PostgresExporter

        return PostgresExporter
    if name == "create_exporter_from_env":
        from .postgres import create_exporter_from_env

        return create_exporter_from_env
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
