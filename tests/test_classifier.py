import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_coach.layout import LineRole, classify_resume  # noqa: E402
from resume_coach.layout.catalog import (  # noqa: E402
    CONTACT_INFO_MAX_POSITION,
    JOB_TITLE_MAX_POSITION,
    SECTION_HEADER_CATALOG,
)
from resume_coach.layout.classifier import clean_contact_line, normalize_line  # noqa: E402

SAMPLE = (
    "Header\n"
    "John Doe\n"
    "Software Engineer\n"
    "john@x.com | 555-123-4567\n"
    "EXPERIENCE\n"
    "Acme Corp | Lead Dev\n"
    "- Did a thing"
)


def _pairs(plan):
    return [(line.role, line.normalized_text) for line in plan]


def _line_at(position, line):
    """Classify ``line`` placed at ``position`` behind a name and filler lines."""
    text = "\n".join(["Jane Roe"] + ["Filler line"] * (position - 1) + [line])
    target = classify_resume(text)[-1]
    assert target.position_index == position
    return target


class ClassifierTests(unittest.TestCase):
    def test_header_block_and_experience_entry(self):
        plan = classify_resume(SAMPLE)
        self.assertEqual(
            _pairs(plan),
            [
                (LineRole.NAME, "John Doe"),
                (LineRole.JOB_TITLE_HEADING, "Software Engineer"),
                (LineRole.CONTACT_INFO, "john@x.com | 555-123-4567"),
                (LineRole.SECTION_HEADER, "EXPERIENCE"),
                (LineRole.EXPERIENCE_ENTRY_HEADING, "Acme Corp | Lead Dev"),
                (LineRole.BULLET, "Did a thing"),
            ],
        )
        self.assertEqual(plan[4].section_context, "EXPERIENCE")
        self.assertEqual(plan.name, "John Doe")
        self.assertEqual(plan.sections(), ["EXPERIENCE"])

    def test_header_placeholder_counts_toward_position(self):
        plan = classify_resume(SAMPLE)
        self.assertEqual([line.position_index for line in plan], [1, 2, 3, 4, 5, 6])

    def test_inline_section_header_splits_into_body(self):
        plan = classify_resume("Jane Roe\nSoftware Engineer\nSKILLS: React, Node")
        header, body = plan[2], plan[3]
        self.assertEqual(header.role, LineRole.SECTION_HEADER)
        self.assertEqual(header.section_context, "SKILLS")
        self.assertEqual(body.role, LineRole.BODY)
        self.assertEqual(body.normalized_text, "React, Node")
        self.assertEqual(body.section_context, "SKILLS")

    def test_dash_line_outside_experience_is_bullet(self):
        text = (
            "Jane Roe\n"
            "Data Engineer\n"
            "jane@example.com\n"
            "555.123.4567\n"
            "PROJECTS\n"
            "- Improved throughput by 30%\n"
            "- Improved Search - Ranking"
        )
        plan = classify_resume(text)
        self.assertEqual(plan[-2].role, LineRole.BULLET)
        self.assertEqual(plan[-2].normalized_text, "Improved throughput by 30%")
        self.assertEqual(plan[-1].role, LineRole.BULLET)
        self.assertNotIn(LineRole.EXPERIENCE_ENTRY_HEADING, plan.roles)

    def test_year_range_starts_entry_in_work_sections(self):
        text = (
            "Jane Roe\n"
            "Engineer\n"
            "jane@example.com\n"
            "EMPLOYMENT HISTORY\n"
            "2019 - Present\n"
            "Built the billing platform"
        )
        plan = classify_resume(text)
        self.assertEqual(plan[4].role, LineRole.EXPERIENCE_ENTRY_HEADING)
        self.assertEqual(plan[5].role, LineRole.BODY)

    def test_only_first_line_is_name(self):
        plan = classify_resume("John Doe\nJohn Doe\nJohn Doe\nSUMMARY\nJohn Doe")
        names = [i for i, line in enumerate(plan) if line.role is LineRole.NAME]
        self.assertEqual(names, [0])

    def test_markdown_and_separators_are_dropped(self):
        plan = classify_resume("**John Doe**\n--\n•\n• --\n**Backend Developer**")
        self.assertEqual(
            _pairs(plan),
            [(LineRole.NAME, "John Doe"), (LineRole.BODY, "Backend Developer")],
        )

    def test_record_count_never_exceeds_lines_without_inline_headers(self):
        text = SAMPLE + "\n\n\nEDUCATION\nState University\n•\n- \n"
        non_blank = [line for line in text.split("\n") if line.strip()]
        self.assertLessEqual(len(classify_resume(text)), len(non_blank))

    def test_classification_is_repeatable(self):
        first = classify_resume(SAMPLE)
        second = classify_resume(SAMPLE)
        self.assertEqual(first, second)
        self.assertEqual([line.to_dict() for line in first], [line.to_dict() for line in second])

    def test_empty_input_gives_empty_plan(self):
        self.assertEqual(len(classify_resume("")), 0)
        self.assertEqual(len(classify_resume("\n \n")), 0)
        self.assertIsNone(classify_resume("").name)

    def test_pipe_title_in_header_block_is_contact_info(self):
        plan = classify_resume("Jane Roe\nSenior Engineer | Remote")
        self.assertEqual(plan[1].role, LineRole.CONTACT_INFO)

    def test_bare_bullet_marker_still_emits_bullet(self):
        plan = classify_resume("Jane\nA\nB\nC\nD\nSKILLS\n-\nPython")
        self.assertEqual(len(plan), 8)
        self.assertEqual(plan[6].role, LineRole.BULLET)
        self.assertEqual(plan[6].normalized_text, "")
        self.assertEqual(plan[6].section_context, "SKILLS")
        self.assertEqual(plan[7].role, LineRole.BODY)

    def test_contact_line_emptied_by_cleaning_is_kept(self):
        plan = classify_resume("Jane\nPortfolio |\nSUMMARY")
        self.assertEqual(
            _pairs(plan),
            [
                (LineRole.NAME, "Jane"),
                (LineRole.CONTACT_INFO, ""),
                (LineRole.SECTION_HEADER, "SUMMARY"),
            ],
        )

    def test_job_title_position_boundary(self):
        last_title = _line_at(JOB_TITLE_MAX_POSITION - 1, "Platform Engineer")
        self.assertEqual(last_title.role, LineRole.JOB_TITLE_HEADING)
        past_title = _line_at(JOB_TITLE_MAX_POSITION, "Platform Engineer")
        self.assertEqual(past_title.role, LineRole.BODY)

    def test_contact_position_boundary(self):
        for line in ("Reach me at j@x.com", "Berlin | Remote", "Call 555-123-4567"):
            with self.subTest(line=line):
                inside = _line_at(CONTACT_INFO_MAX_POSITION - 1, line)
                self.assertEqual(inside.role, LineRole.CONTACT_INFO)
                outside = _line_at(CONTACT_INFO_MAX_POSITION, line)
                self.assertEqual(outside.role, LineRole.BODY)
                self.assertEqual(outside.normalized_text, line)

    def test_catalog_is_fixed(self):
        self.assertEqual(len(SECTION_HEADER_CATALOG), 25)
        self.assertIn("VOLUNTEER WORK", SECTION_HEADER_CATALOG)

    def test_normalize_line(self):
        self.assertIsNone(normalize_line("  header "))
        self.assertIsNone(normalize_line("**"))
        self.assertEqual(normalize_line("• Led team"), "Led team")
        self.assertEqual(normalize_line("- **Led** team"), "- Led team")

    def test_clean_contact_line_drops_portfolio(self):
        self.assertEqual(
            clean_contact_line("jane@example.com | Portfolio | 555-123-4567"),
            "jane@example.com | 555-123-4567",
        )
        self.assertEqual(clean_contact_line("| jane@example.com |"), "jane@example.com")


if __name__ == "__main__":
    unittest.main()
