from .catalog import CONTACT_INFO_MAX_POSITION, JOB_TITLE_MAX_POSITION, SECTION_HEADER_CATALOG
from .classifier import classify_resume, normalize_line
from .models import ClassifiedLine, LayoutPlan, LineRole
from .sections import ResumeSection, parse_resume_into_sections

__all__ = [
    "SECTION_HEADER_CATALOG",
    "JOB_TITLE_MAX_POSITION",
    "CONTACT_INFO_MAX_POSITION",
    "classify_resume",
    "normalize_line",
    "ClassifiedLine",
    "LayoutPlan",
    "LineRole",
    "ResumeSection",
    "parse_resume_into_sections",
]
