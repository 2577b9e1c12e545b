"""
Tests for keyword synthesis.

Run with: pytest backend/tests/test_keywords.py -v
"""
import pytest
from types import SimpleNamespace
from pydantic import ValidationError

from staffing.schemas import PositionSkillIn, SkillIn
from staffing.services.keywords import (
    GENERAL_REPEAT_MULTIPLIER,
    SKILL_REPEAT_MULTIPLIER,
    contains_token,
    employee_keywords,
    experience_keywords,
    normalize,
    position_keywords,
    project_keywords,
    rebuild_employee_keywords,
    skills_to_keywords,
)


class TestNormalize:
    """Tests for the normalization pipeline."""

    def test_lowercases_and_strips_punctuation(self):
        """Should lowercase and drop punctuation characters."""
        assert normalize("Scalable, Backend; SYSTEMS!") == "scalable backend systems"

    def test_joins_fragments_with_spaces(self):
        """Fragments should be treated as separate words."""
        assert normalize("The Backend,", "and APIs!") == "backend apis"

    def test_removes_function_words_at_string_edges(self):
        """Padding lets the first and last word be matched as function words."""
        assert normalize("and python and") == "python"
        assert normalize("the") == ""

    def test_removes_consecutive_function_words(self):
        """Adjacent function words should all be removed."""
        assert normalize("of the and python") == "python"

    def test_removes_finnish_function_words(self):
        """Finnish function words are stripped alongside English ones."""
        assert normalize("Ohjelmistokehitys ja testaus") == "ohjelmistokehitys testaus"

    def test_function_word_glued_to_word_is_kept(self):
        """Only single-space-bounded function words are removed."""
        assert normalize("theory andromeda") == "theory andromeda"
        assert normalize("cloud/and/devops") == "cloudanddevops"

    def test_keeps_plus_and_hash_in_skill_names(self):
        """C++ and C# must survive normalization."""
        assert normalize("C++ and C# developer") == "c++ c# developer"

    def test_collapses_whitespace(self):
        """Runs of whitespace collapse to a single space."""
        assert normalize("  python\n\n\tdjango   ") == "python django"

    def test_handles_none_fragments(self):
        """None fragments are treated as empty strings."""
        assert normalize(None, "python") == "python"

    @pytest.mark.parametrize("text", [
        "The Quick, Brown Fox -- and the Lazy Dog!",
        "Kehitämme ja ylläpidämme järjestelmiä, sekä testaamme niitä.",
        "the the the a an",
        "node.js / React (TypeScript) & C++",
        "",
        "   ",
    ])
    def test_normalize_is_idempotent(self, text):
        """normalize(normalize(x)) == normalize(x)."""
        once = normalize(text)
        assert normalize(once) == once

    def test_normalize_is_deterministic(self):
        """Same input always yields the same document."""
        text = "Senior Python developer for the payments backend"
        assert normalize(text) == normalize(text)


class TestSkillsToKeywords:
    """Tests for repetition weighting of skills."""

    def test_level_three_repeats_twelve_times(self):
        """A level-3 skill is repeated 3 * SKILL_REPEAT_MULTIPLIER times."""
        result = skills_to_keywords([SkillIn(name="go", level=3)])
        assert result.split() == ["go"] * (3 * SKILL_REPEAT_MULTIPLIER)
        assert len(result.split()) == 12

    def test_multiple_skills(self):
        """Each skill contributes its own repetitions."""
        result = skills_to_keywords([
            SkillIn(name="python", level=1),
            SkillIn(name="rust", level=2),
        ]).split()
        assert result.count("python") == 4
        assert result.count("rust") == 8

    def test_zero_level_skill_contributes_nothing(self):
        """A level-0 skill adds no tokens."""
        assert skills_to_keywords([SkillIn(name="cobol", level=0)]) == ""

    def test_fractional_level_truncates(self):
        """Fractional repetition counts truncate toward zero."""
        result = skills_to_keywords([SkillIn(name="sql", level=1.6)])
        assert result.split() == ["sql"] * 6

    def test_empty_skill_list(self):
        assert skills_to_keywords([]) == ""


class TestEntityKeywords:
    """Tests for per-entity field composition."""

    def test_project_keywords_use_name_and_description(self):
        """Project documents hold name + description only."""
        assert project_keywords("Payments", "Scalable backend systems") == \
            "payments scalable backend systems"

    def test_position_keywords_weight_name_and_skills(self):
        """Position name is repeated x4 and skills by level x4."""
        tokens = position_keywords(
            "Backend Developer",
            "Builds the APIs",
            [SkillIn(name="Rust", level=1)],
        ).split()

        assert tokens.count("backend") == GENERAL_REPEAT_MULTIPLIER
        assert tokens.count("developer") == GENERAL_REPEAT_MULTIPLIER
        assert tokens.count("rust") == SKILL_REPEAT_MULTIPLIER
        assert "builds" in tokens
        assert "the" not in tokens

    def test_experience_keywords_weight_customer_position_and_skills(self):
        """Customer, title and skill list are each repeated x4."""
        tokens = experience_keywords(
            name="Webshop",
            customer="Acme",
            position="Lead Developer",
            description="Built the store",
            skills=["python", "django"],
        ).split()

        assert tokens.count("webshop") == 1
        assert tokens.count("acme") == 4
        assert tokens.count("lead") == 4
        assert tokens.count("python") == 4
        assert tokens.count("django") == 4
        assert tokens.count("store") == 1

    def test_employee_keywords_lead_with_experience_documents(self):
        """Experience documents lead and are not re-normalized."""
        result = employee_keywords(
            "Remote work",
            [SkillIn(name="go", level=1)],
            ["acme acme", "globex"],
        )
        assert result == "acme acme globex remote work go go go go"

    def test_employee_keywords_without_experience(self):
        """No leading or trailing space when there is no experience."""
        result = employee_keywords("The cloud", [], [])
        assert result == "cloud"

    def test_empty_employee_yields_empty_document(self):
        assert employee_keywords("", [], []) == ""


class TestContainsToken:
    """Tests for whole-token containment."""

    def test_matches_whole_token(self):
        assert contains_token("java backend", "java")
        assert contains_token("backend java", "java")

    def test_java_does_not_match_javascript(self):
        """Partial-name collisions must not match."""
        assert not contains_token("javascript frontend", "java")

    def test_token_is_normalized(self):
        """Skill names are normalized like documents before matching."""
        assert contains_token("backend java", "Java")
        assert contains_token("machine learning ops", "Machine Learning")

    def test_token_that_normalizes_to_nothing_never_matches(self):
        assert not contains_token("the backend", "the")

    def test_empty_document(self):
        assert not contains_token("", "rust")


class TestRebuildEmployeeKeywords:
    """Tests for recomputing a loaded employee's document."""

    def test_assigns_and_returns_aggregate(self):
        employee = SimpleNamespace(
            preferences="Remote",
            skills=[SkillIn(name="go", level=1)],
            experience=[SimpleNamespace(keywords="webshop acme")],
            keywords="stale",
        )

        result = rebuild_employee_keywords(employee)

        assert result == "webshop acme remote go go go go"
        assert employee.keywords == result


class TestSkillLevelBounds:
    """Skill levels must stay finite and bounded before they become repetitions."""

    @pytest.mark.parametrize("model", [SkillIn, PositionSkillIn])
    @pytest.mark.parametrize("level", ['"Infinity"', '"NaN"', "1e10", "-1"])
    def test_rejects_unusable_levels(self, model, level):
        with pytest.raises(ValidationError):
            model.model_validate_json(f'{{"name": "go", "level": {level}}}')

    @pytest.mark.parametrize("model", [SkillIn, PositionSkillIn])
    def test_accepts_upper_bound(self, model):
        skill = model.model_validate_json('{"name": "go", "level": 100}')
        assert len(skills_to_keywords([skill]).split()) == 400
