"""
Skill vocabulary.

One configuration table of (synonym, canonical name) pairs, loaded once from YAML
and immutable for the lifetime of the process. Many synonyms may resolve to the
same canonical name; a synonym with no canonical name is displayed capitalized.
"""

import os
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from deskmate.contexts.skills.logger import _log_debug

load_dotenv()
PACKAGED_VOCABULARY = Path(__file__).parent / "vocabulary.yaml"
VOCABULARY_PATH = Path(os.getenv("SKILL_VOCABULARY_PATH") or PACKAGED_VOCABULARY)


@dataclass(frozen=True)
class SkillVocabulary:
    """
    Ordered, immutable synonym table.

    Attributes:
        pairs: (synonym, canonical name or None) in file order; synonyms are lower-case
    """

    pairs: Tuple[Tuple[str, Optional[str]], ...]

    def __post_init__(self):
        if not self.pairs:
            raise ValueError("Skill vocabulary must contain at least one synonym")

    def __len__(self) -> int:
        return len(self.pairs)

    @property
    def synonyms(self) -> Tuple[str, ...]:
        return tuple(synonym for synonym, _ in self.pairs)

    @cached_property
    def mapping(self) -> Dict[str, Optional[str]]:
        return dict(self.pairs)

    def canonical_for(self, token: str) -> str:
        """
        Resolve a matched synonym to its display name.

        Falls back to the capitalized token when the vocabulary has no explicit
        canonical name for it.
        """
        canonical = self.mapping.get(token.lower())
        if canonical:
            return canonical
        return token.strip().capitalize()

    @property
    def canonical_names(self) -> set[str]:
        return {self.canonical_for(synonym) for synonym in self.synonyms}

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_entries(cls, entries: list) -> "SkillVocabulary":
        """
        Build from the YAML entry list.

        Each entry is a bare token string or a mapping with `canonical` and
        `synonyms`. Duplicate synonyms keep their first occurrence.

        Raises:
            ValueError: If an entry has neither form, or nothing remains
        """
        pairs = []
        seen = set()

        def add(synonym, canonical):
            key = str(synonym).lower()
            if not key.strip() or key in seen:
                return
            seen.add(key)
            pairs.append((key, canonical))

        for entry in entries or []:
            if isinstance(entry, str):
                add(entry, None)
            elif isinstance(entry, dict) and entry.get("synonyms"):
                canonical = entry.get("canonical")
                for synonym in entry["synonyms"]:
                    add(synonym, str(canonical) if canonical else None)
            else:
                raise ValueError(f"Invalid vocabulary entry: {entry!r}")

        return cls(pairs=tuple(pairs))

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Optional[str]]) -> "SkillVocabulary":
        """Build from a plain {synonym: canonical} dict (insertion order kept)."""
        return cls(pairs=tuple((str(k).lower(), v) for k, v in mapping.items()))


_CACHE: Dict[Path, SkillVocabulary] = {}


def load_vocabulary(path: Path = None) -> SkillVocabulary:
    """
    Load a vocabulary YAML file, caching it per path.

    Args:
        path: YAML file with a top-level `skills` list. Defaults to
              SKILL_VOCABULARY_PATH from environment, else the packaged vocabulary

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no usable entries
    """
    path = Path(path) if path is not None else VOCABULARY_PATH

    if path in _CACHE:
        return _CACHE[path]

    if not path.exists():
        raise FileNotFoundError(f"Skill vocabulary not found at {path}")

    config = OmegaConf.load(path)
    config_dict = OmegaConf.to_container(config, resolve=True)
    vocabulary = SkillVocabulary.from_entries(config_dict.get("skills"))

    _log_debug(f"Loaded {len(vocabulary)} skill synonyms from {path}")
    _CACHE[path] = vocabulary
    return vocabulary


def clear_cache() -> None:
    """Forget loaded vocabularies."""
    _CACHE.clear()
