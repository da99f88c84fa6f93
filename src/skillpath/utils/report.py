"""
Career Report Builder.

FUNCTIONS:
    build_report      (public, returns a python-docx Document)
    report_to_bytes   (public)
    report_filename   (public)

Renders a published Profile snapshot as a Word document: persona, skills,
gaps, recommendations, study plan, courses and salary projection.
"""

import re
from io import BytesIO
from typing import Any, Dict

from docx import Document

from skillpath.utils.skills import normalize_skills


def build_report(profile: Dict[str, Any]):
    """Build the career report of a Profile snapshot.

    Args:
        profile: A published snapshot (or the live Profile).

    Returns:
        The report as a python-docx Document.
    """
    doc = Document()

    persona = profile.get("persona_profile_data") or {}
    doc.add_heading(profile.get("full_name") or "Career Profile", level=0)

    p = doc.add_paragraph()
    p.add_run(persona.get("title") or profile.get("job_title") or "").bold = True
    if profile.get("job_title"):
        p.add_run(f"\n{profile['job_title']}")
        if profile.get("industry_type"):
            p.add_run(f", {profile['industry_type']}")
    location = ", ".join(
        part for part in (profile.get("city_state"), profile.get("country")) if part
    )
    if location:
        p.add_run(f"\n{location}")

    if persona.get("summary"):
        doc.add_paragraph(persona["summary"])
    if persona.get("traits"):
        doc.add_paragraph(" | ".join(persona["traits"]))

    skills = normalize_skills(profile.get("current_skills"))
    if skills:
        doc.add_heading("Current Skills", level=1)
        for skill in skills:
            doc.add_paragraph(f"{skill.name} ({skill.level})", style="List Bullet")

    gaps = profile.get("skill_gaps") or []
    if gaps:
        doc.add_heading("Skill Gaps", level=1)
        for gap in gaps:
            doc.add_paragraph(
                f"{gap.get('name')}: {gap.get('priority')} priority, {gap.get('impact')}",
                style="List Bullet",
            )

    if profile.get("recommendations"):
        doc.add_heading("Recommendations", level=1)
        doc.add_paragraph(profile["recommendations"])

    study_plan = profile.get("study_plan") or []
    if study_plan:
        doc.add_heading("Study Plan", level=1)
        for phase in study_plan:
            doc.add_heading(f"{phase.get('phase')}: {phase.get('goal')}", level=2)
            for step in phase.get("steps") or []:
                doc.add_paragraph(step, style="List Bullet")

    courses = profile.get("recommended_courses") or []
    if courses:
        doc.add_heading("Recommended Courses", level=1)
        for course in courses:
            p = doc.add_paragraph(style="List Bullet")
            p.add_run(course.get("title") or "").bold = True
            p.add_run(
                f" ({course.get('platform')}, {course.get('duration')}, "
                f"rated {course.get('rating')})"
            )
            if course.get("url"):
                p.add_run(f"\n{course['url']}")

    projection = profile.get("salary_projection")
    if projection:
        currency = profile.get("currency") or ""
        doc.add_heading("Salary Projection", level=1)
        doc.add_paragraph(
            f"Current: {currency} {float(projection.get('current') or 0):,.0f}\n"
            f"Projected: {currency} {float(projection.get('projected') or 0):,.0f}"
        )
        if projection.get("reason"):
            doc.add_paragraph(projection["reason"])
        if projection.get("reference"):
            doc.add_paragraph(f"Source: {projection['reference']}")

    return doc


def report_to_bytes(profile: Dict[str, Any]) -> bytes:
    """Return the report of a Profile snapshot as .docx bytes."""
    buffer = BytesIO()
    build_report(profile).save(buffer)
    return buffer.getvalue()


def report_filename(profile: Dict[str, Any]) -> str:
    """Return a safe download filename, e.g. "aisyah_rahman_career_report.docx"."""
    name = re.sub(r"[^a-z0-9]+", "_", (profile.get("full_name") or "").lower()).strip("_")
    return f"{name or 'skillpath'}_career_report.docx"
