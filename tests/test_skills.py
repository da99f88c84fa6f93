# ---------- TESTS FOR SKILL NORMALIZATION ----------

import pytest

from skillpath.config.profile_schemas import RatedSkill
from skillpath.utils.skills import (
    SkillName,
    normalize_skills,
    parse_skill,
    skill_names,
    skills_as_text,
    split_skill_text,
)


def test_split_skill_text():
    assert split_skill_text("Python, SQL , ,Airflow") == ["Python", "SQL", "Airflow"]
    assert split_skill_text("  ,  ") == []


def test_parse_skill_tags_entries():
    assert parse_skill("Python") == SkillName("Python")
    assert parse_skill({"name": "SQL", "level": "expert"}) == RatedSkill(
        name="SQL", level="Expert", relevant=True
    )


def test_parse_skill_keeps_skill_with_unknown_level():
    skill = parse_skill({"name": "SQL", "level": "wizard"})
    assert skill == RatedSkill(name="SQL", level="Intermediate")


@pytest.mark.parametrize("item", ["", "   ", {"level": "Expert"}, 42])
def test_parse_skill_rejects_unusable_entries(item):
    with pytest.raises(ValueError):
        parse_skill(item)


def test_normalize_list_of_names():
    skills = normalize_skills(["Python", "SQL"])
    assert skills == [
        RatedSkill(name="Python", level="Intermediate", relevant=True),
        RatedSkill(name="SQL", level="Intermediate", relevant=True),
    ]


def test_normalize_mixed_list_dedupes_case_insensitively():
    skills = normalize_skills(
        ["Python", {"name": "python", "level": "Expert"}, {"name": "Go", "level": "Beginner"}, ""]
    )
    assert [(s.name, s.level) for s in skills] == [
        ("Python", "Intermediate"),
        ("Go", "Beginner"),
    ]


def test_normalize_comma_separated_string():
    assert skill_names("Python, SQL") == ["Python", "SQL"]


@pytest.mark.parametrize("raw", [None, 7, {"name": "Python"}])
def test_normalize_unsupported_shapes(raw):
    assert normalize_skills(raw) == []


def test_skills_as_text_round_trips_form_text():
    assert skills_as_text([{"name": "Python", "level": "Expert"}, "SQL"]) == "Python, SQL"
