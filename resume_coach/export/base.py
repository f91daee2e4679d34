"""
Renderer contract shared by the export formats.

Every renderer consumes the same :class:`LayoutPlan` produced by the shared
classifier, so PDF and DOCX output stay visually consistent.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from resume_coach.layout.models import LayoutPlan


class ExportFormat(str, Enum):
    """Supported export formats."""
    PDF = "pdf"
    DOCX = "docx"


@dataclass(frozen=True)
class ExportedDocument:
    filename: str
    media_type: str
    content: bytes


class Renderer(ABC):
    """Base class for stateless document renderers."""

    format: ExportFormat
    media_type: str

    @property
    def extension(self) -> str:
        return self.format.value

    @abstractmethod
    def render(self, plan: LayoutPlan) -> bytes:
        """
        Render a layout plan to a binary document.

        Args:
            plan: Classified resume lines

        Returns:
            Document file as bytes
        """
