"""
AI agents backed by Google Gemini.

Each agent keeps its prompts beside it and exposes typed async operations.
"""

from agents.base import BaseAgent
from agents.resume.agent import ResumeAgent

__all__ = [
    "BaseAgent",
    "ResumeAgent",
]
