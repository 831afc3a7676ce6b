"""Tests for mapping parsed resumes onto intake form fields."""

from agents.resume.agent import ParsedResume
from agents.resume.mapping import experience_years, to_form_data, validate_parsed


def _parsed(**overrides):
    data = {
        "personal_info": {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "phone": "+44 20 7946 0000",
            "linkedin_url": "https://linkedin.com/in/ada",
        },
        "experience": [
            {"company": "Analytical Engines", "role": "Engineer", "duration": "3 years"},
            {"company": "Babbage & Co", "role": "Analyst", "duration": "2 years"},
        ],
        "skills": ["python"],
        "total_experience": "5+ years",
    }
    data.update(overrides)
    return ParsedResume.model_validate(data)


def test_form_data_uses_first_experience_as_current():
    form = to_form_data(_parsed())

    assert form["candidate_name"] == "Ada Lovelace"
    assert form["candidate_email"] == "ada@example.com"
    assert form["linkedin_profile"] == "https://linkedin.com/in/ada"
    assert form["current_company"] == "Analytical Engines"
    assert form["current_role"] == "Engineer"
    assert form["time_with_current_company"] == "3 years"
    assert form["years_of_experience"] == "5+ years"


def test_form_data_omits_missing_values():
    form = to_form_data(_parsed(experience=[], total_experience=None))

    assert "current_company" not in form
    assert "years_of_experience" not in form
    assert "git_profile" not in form


def test_experience_years_from_total():
    assert experience_years(_parsed()) == 5


def test_experience_years_falls_back_to_positions():
    assert experience_years(_parsed(total_experience=None)) == 2
    assert experience_years(_parsed(total_experience="several")) == 2


def test_complete_resume_is_valid():
    report = validate_parsed(_parsed())
    assert report == {"is_valid": True, "missing_fields": [], "completeness": 100}


def test_sparse_resume_is_invalid():
    report = validate_parsed(ParsedResume.model_validate({"personal_info": {"name": "X"}}))

    assert report["is_valid"] is False
    assert report["missing_fields"] == [
        "personal_info.email", "personal_info.phone", "experience", "skills",
    ]
    assert report["completeness"] == 20


def test_two_missing_fields_still_valid():
    report = validate_parsed(_parsed(skills=[], experience=[]))
    assert report["is_valid"] is True
    assert report["completeness"] == 60
