"""Resume coach: resume parsing, AI feedback and tailoring, and PDF/DOCX export."""

__version__ = "0.1.0"
