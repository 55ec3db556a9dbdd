"""Resume analysis: LLM extraction and keyword skill matching."""

from career_roadmap.analysis.resume_analyzer import analyze_resume, run_resume_analysis
from career_roadmap.analysis.skill_extractor import extract_skills_from_text
from career_roadmap.schemas.resume_analysis import ResumeAnalysis

__all__ = ["analyze_resume", "run_resume_analysis", "extract_skills_from_text", "ResumeAnalysis"]
