from typing import List

from pydantic import BaseModel, Field

from careersync.schemas.base import CamelModel


class JobRequirement(BaseModel):
    title: str
    description: str = ""
    requirements: str = ""
    skills: List[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    score: int = Field(ge=0, le=100)
    matching_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    degraded: bool = False


class AnalyzeResumeRequest(CamelModel):
    user_id: int
    job_id: int
    resume_text: str = Field(min_length=1)


class AnalyzeResumeResponse(CamelModel):
    match_score: int
    matching_skills: List[str]
    missing_skills: List[str]
    strengths: List[str]
    suggestions: List[str]
    degraded: bool
    cached: bool

    @classmethod
    def from_result(cls, result: AnalysisResult, cached: bool) -> "AnalyzeResumeResponse":
        return cls(
            match_score=result.score,
            matching_skills=result.matching_skills,
            missing_skills=result.missing_skills,
            strengths=result.strengths,
            suggestions=result.suggestions,
            degraded=result.degraded,
            cached=cached,
        )
