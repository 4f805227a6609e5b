"""Output formatting and export."""

from .console import ConsoleOutput
from .export import Exporter

__all__ = ["ConsoleOutput", "Exporter"]
