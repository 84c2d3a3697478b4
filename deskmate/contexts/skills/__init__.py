"""
Skills Context

Responsibilities:
- Holds the skill vocabulary (synonym -> canonical name)
- Extracts canonical skill names from free text
- Maintains the resume-declared and learned skill collections

Owns: Skill vocabulary, extraction, skills inventory
Never: Reads files or decides when a reminder is complete
"""

from deskmate.contexts.skills.commands import (
    create_skill,
    delete_skill,
    new_skills,
    record_learned_skills,
    save_resume_skills,
    union_learned_skills,
)
from deskmate.contexts.skills.extractor import extract
from deskmate.contexts.skills.vocabulary import SkillVocabulary, load_vocabulary

__all__ = [
    "create_skill",
    "delete_skill",
    "new_skills",
    "record_learned_skills",
    "save_resume_skills",
    "union_learned_skills",
    "extract",
    "SkillVocabulary",
    "load_vocabulary",
]
