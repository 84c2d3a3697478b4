"""
Skill Extractor

Detects canonical skill names in free text (a completed reminder's text, or resume
content) by case-insensitive substring matching against the skill vocabulary.

Matching is deliberately plain substring containment. Short synonyms can match
inside longer words or inside other synonyms ("react" in "reactive"); the
vocabulary guards against the worst cases with space-delimited tokens.
"""

import re
from typing import Iterable, Optional

from deskmate.contexts.skills.vocabulary import SkillVocabulary, load_vocabulary

# Punctuation that ends a word. A "." only counts before whitespace or the end of the
# text, so "node.js" and ".net" survive; "c++", "c#" and "ci/cd" are never touched.
SEPARATOR_PATTERN = re.compile(r"[\s,;:!?()\[\]{}\"']|\.(?=\s|$)")


def extract(text: Optional[str], vocabulary: Optional[SkillVocabulary] = None) -> set[str]:
    """
    Find every vocabulary skill mentioned in text.

    Args:
        text: Free text, may be empty or None
        vocabulary: Synonym table (defaults to the configured vocabulary)

    Returns:
        Set of canonical skill names; synonyms of the same skill collapse to one entry

    Example:
        >>> extract("Finished the React and nodejs assignment")
        {'React', 'Node.js'}
    """
    if not text:
        return set()

    vocabulary = vocabulary or load_vocabulary()
    # Padding lets space-delimited synonyms match at the start and end of the text
    haystack = f" {SEPARATOR_PATTERN.sub(' ', text.lower())} "

    return {
        vocabulary.canonical_for(synonym)
        for synonym in vocabulary.synonyms
        if synonym in haystack
    }


def missing_from(candidates: Iterable[str], existing: Iterable[str]) -> list[str]:
    """
    Names in candidates that are not already in existing (case-insensitive).

    Preserves the order of candidates and drops repeats within it.
    """
    seen = {name.lower() for name in existing}
    result = []
    for name in candidates:
        key = name.lower()
        if key not in seen:
            seen.add(key)
            result.append(name)
    return result
