from __future__ import annotations

import argparse
import json
from pathlib import Path

from resume_coach.export import build_layout_plan, export_resume
from resume_coach.parsing.parse import parse_resume_file


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a resume file as PDF or DOCX.")
    parser.add_argument("input", help="Resume file (.txt, .md, .pdf or .docx)")
    parser.add_argument("--format", choices=["pdf", "docx"], default="pdf", help="Output format")
    parser.add_argument(
        "--out-dir",
        default=".",
        help="Directory for the rendered file; the name comes from the resume's first line.",
    )
    parser.add_argument(
        "--layout",
        action="store_true",
        help="Print the classified lines as JSON instead of rendering.",
    )
    args = parser.parse_args()

    parsed = parse_resume_file(args.input)
    for warning in parsed.parsing_warnings:
        print(f"warning: {warning}")

    if args.layout:
        plan = build_layout_plan(parsed.text)
        print(json.dumps([line.to_dict() for line in plan], indent=2, ensure_ascii=False))
        return

    document = export_resume(parsed.text, args.format)
    out_path = Path(args.out_dir) / document.filename
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(document.content)
    print(f"Wrote {out_path} ({len(document.content)} bytes)")


if __name__ == "__main__":
    main()
