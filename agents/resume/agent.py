"""Resume agent: structured extraction and job-fit screening."""

import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from agents.base import BaseAgent
from agents.resume.prompts import (
    RESUME_PARSER_SYSTEM_PROMPT,
    RESUME_SCREENING_SYSTEM_PROMPT,
    RESUME_SCREENING_PROMPT,
)
from core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def _empty_list(value: Any) -> Any:
    return [] if value is None else value


class PersonalInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    company: Optional[str] = None
    role: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None


class EducationEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    institution: Optional[str] = None
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    graduation_year: Optional[str] = None

    @field_validator("graduation_year", mode="before")
    @classmethod
    def stringify_year(cls, v):
        return str(v) if isinstance(v, int) else v


class ParsedResume(BaseModel):
    """Structured resume extraction. Experience is most recent first."""

    model_config = ConfigDict(extra="ignore")

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    summary: Optional[str] = None
    total_experience: Optional[str] = None

    @field_validator("personal_info", mode="before")
    @classmethod
    def default_personal_info(cls, v):
        return {} if v is None else v

    @field_validator("experience", "education", "skills", mode="before")
    @classmethod
    def default_lists(cls, v):
        return _empty_list(v)

    @field_validator("total_experience", mode="before")
    @classmethod
    def stringify_total(cls, v):
        if isinstance(v, (int, float)):
            return f"{v:g} years"
        return v


class ResumeAnalysis(BaseModel):
    """Job-fit assessment. Scores are always within 0-100."""

    model_config = ConfigDict(extra="ignore")

    overall_score: int = 0
    skills_match: int = 0
    experience_match: int = 0
    education_match: int = 0
    highlights: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    recommendation: Literal["hire", "interview", "reject"] = "reject"

    @field_validator(
        "overall_score", "skills_match", "experience_match", "education_match",
        mode="before",
    )
    @classmethod
    def clamp_score(cls, v):
        if v is None:
            return 0
        if isinstance(v, bool):
            raise ValueError("score must be a number")
        return max(0, min(100, round(float(v))))

    @field_validator("highlights", "concerns", mode="before")
    @classmethod
    def default_lists(cls, v):
        return _empty_list(v)

    @field_validator("recommendation", mode="before")
    @classmethod
    def normalize_recommendation(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "reject"
        return v.strip().lower() if isinstance(v, str) else v


class ResumeAgent(BaseAgent):
    """
    Gemini-backed resume parser and screener.

    Every failure mode (transport, empty reply, non-JSON, wrong shape)
    surfaces as ``UpstreamError``; nothing is guessed or retried here.
    """

    def __init__(self, model: Optional[str] = None, client: Any = None):
        super().__init__(
            name="resume_agent",
            instructions=RESUME_PARSER_SYSTEM_PROMPT,
            model=model,
            client=client,
        )

    async def parse_resume(self, text: str) -> ParsedResume:
        """Extract structured data from plain resume text."""
        data = await self.run_json(
            text, temperature=0.1, instructions=RESUME_PARSER_SYSTEM_PROMPT
        )
        try:
            return ParsedResume.model_validate(data)
        except ValidationError as exc:
            logger.error(f"Resume parse reply did not match schema: {exc.error_count()} errors")
            raise UpstreamError("Resume parser returned an invalid structure") from exc

    async def analyze_resume(
        self,
        text: str,
        job_description: str,
        job_requirements: Optional[str] = None,
    ) -> ResumeAnalysis:
        """Score a resume against a job description and requirements."""
        prompt = RESUME_SCREENING_PROMPT.format(
            job_description=job_description or "",
            job_requirements=job_requirements or "",
            resume_text=text,
        )
        data = await self.run_json(
            prompt, temperature=0.3, instructions=RESUME_SCREENING_SYSTEM_PROMPT
        )
        try:
            return ResumeAnalysis.model_validate(data)
        except ValidationError as exc:
            logger.error(f"Resume analysis reply did not match schema: {exc.error_count()} errors")
            raise UpstreamError("Resume analysis returned an invalid structure") from exc

    async def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Dispatch on ``action``: ``parse`` or ``analyze``."""
        action = input_data.get("action", "parse")
        text = input_data.get("text", "")
        if action == "analyze":
            analysis = await self.analyze_resume(
                text,
                input_data.get("job_description", ""),
                input_data.get("job_requirements"),
            )
            return analysis.model_dump()
        parsed = await self.parse_resume(text)
        return parsed.model_dump()
