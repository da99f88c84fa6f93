# ---------- SKILL NORMALIZATION FUNCTIONS ----------

from dataclasses import dataclass
from typing import Any, List, Union

from skillpath.config.profile_schemas import RatedSkill

DEFAULT_LEVEL = "Intermediate"


@dataclass(frozen=True)
class SkillName:
    """A skill declared by name only (as typed in the background form)."""

    name: str


# A declared skill is either a bare name or a rated record
Skill = Union[SkillName, RatedSkill]


def split_skill_text(text: str) -> List[str]:
    """
    Split a comma-separated skill string into names

    Args:
        text: e.g. "Python, SQL , ,Airflow"

    Returns:
        ["Python", "SQL", "Airflow"]
    """

    return [part.strip() for part in text.split(",") if part.strip()]


def parse_skill(item: Any) -> Skill:
    """
    Tag a raw skill entry as SkillName or RatedSkill

    Args:
        item: a plain string, a {name, level, relevant} dict, or an already tagged value

    Raises:
        ValueError: if the entry has no usable name
    """

    if isinstance(item, (SkillName, RatedSkill)):
        return item
    if isinstance(item, str):
        name = item.strip()
        if not name:
            raise ValueError("Empty skill name")
        return SkillName(name)
    if isinstance(item, dict):
        name = str(item.get("name") or "").strip()
        if not name:
            raise ValueError(f"Skill record without a name: {item}")
        try:
            return RatedSkill(
                name=name,
                level=item.get("level") or DEFAULT_LEVEL,
                relevant=bool(item.get("relevant", True)),
            )
        except ValueError:
            # Unknown level reported: keep the skill, drop the level
            return RatedSkill(name=name, relevant=bool(item.get("relevant", True)))
    raise ValueError(f"Unsupported skill entry: {item!r}")


def normalize_skills(raw: Any, default_level: str = DEFAULT_LEVEL) -> List[RatedSkill]:
    """
    Normalize any accepted current_skills shape into rated records

    Accepts a list of names, a list of records, a mixed list, or a
    comma-separated string. Unusable entries are skipped and duplicate
    names (case-insensitive) keep their first occurrence.

    Args:
        raw: the profile's current_skills value
        default_level: level given to skills declared by name only

    Returns:
        normalized: List[RatedSkill]
    """

    if raw is None:
        return []
    if isinstance(raw, str):
        raw = split_skill_text(raw)
    if not isinstance(raw, (list, tuple)):
        return []

    normalized = []
    seen = set()

    for item in raw:
        try:
            skill = parse_skill(item)
        except ValueError:
            continue
        key = skill.name.lower()
        if key in seen:
            continue
        seen.add(key)
        if isinstance(skill, SkillName):
            skill = RatedSkill(name=skill.name, level=default_level, relevant=True)
        normalized.append(skill)

    return normalized


def skill_names(raw: Any) -> List[str]:
    """Return the plain names of the declared skills, in order."""
    return [skill.name for skill in normalize_skills(raw)]


def skills_as_text(raw: Any) -> str:
    """Render the declared skills back into the form's comma-separated string."""
    return ", ".join(skill_names(raw))
