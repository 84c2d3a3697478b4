"""Unit tests for skill extraction and the vocabulary table."""

import pytest

from deskmate.contexts.skills.extractor import extract, missing_from
from deskmate.contexts.skills.vocabulary import (
    PACKAGED_VOCABULARY,
    SkillVocabulary,
    clear_cache,
    load_vocabulary,
)


class TestExtract:
    """Substring matching against the packaged vocabulary."""

    @pytest.mark.unit
    def test_react_and_nodejs(self, vocabulary):
        found = extract("Finished the React and nodejs assignment", vocabulary)
        assert found == {"React", "Node.js"}

    @pytest.mark.unit
    def test_synonyms_collapse_to_one_canonical(self, vocabulary):
        found = extract("Ported the reactjs widget to React.js", vocabulary)
        assert found == {"React"}

    @pytest.mark.unit
    def test_case_insensitive(self, vocabulary):
        assert extract("DOCKER and KUBERNETES", vocabulary) == {"Docker", "Kubernetes"}

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text(self, vocabulary, text):
        assert extract(text, vocabulary) == set()

    @pytest.mark.unit
    def test_no_matches(self, vocabulary):
        assert extract("Buy groceries and call mom", vocabulary) == set()

    @pytest.mark.unit
    def test_bare_token_is_capitalized(self, vocabulary):
        assert extract("wrote a flask endpoint", vocabulary) == {"Flask"}

    @pytest.mark.unit
    def test_space_delimited_tokens_match_at_text_edges(self, vocabulary):
        assert extract("git", vocabulary) == {"Git"}
        assert extract("Learn Java", vocabulary) == {"Java"}

    @pytest.mark.unit
    def test_space_delimited_tokens_avoid_embedded_words(self, vocabulary):
        assert extract("check the last digit", vocabulary) == set()
        assert extract("I trust the process", vocabulary) == set()
        assert extract("finished javascript course", vocabulary) == {"JavaScript"}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Learned Git.", {"Git"}),
            ("Wrote it in Java, then tests", {"Java"}),
            ("Rust; then Swift!", {"Rust", "Swift"}),
            ("Deploy (AWS)", {"AWS"}),
            ("Read 'git' docs\nand the rust book", {"Git", "Rust"}),
        ],
    )
    def test_space_delimited_tokens_next_to_punctuation(self, vocabulary, text, expected):
        assert extract(text, vocabulary) == expected

    @pytest.mark.unit
    def test_dotted_and_symbol_tokens_survive_punctuation_handling(self, vocabulary):
        found = extract("Used node.js, c++ and c#. Set up ci/cd on .net.", vocabulary)
        assert found == {"Node.js", "C++", "C#", "CI/CD"}

    @pytest.mark.unit
    def test_idempotent(self, vocabulary):
        text = "Deployed the Django app on AWS with docker and postgres"
        assert extract(text, vocabulary) == extract(text, vocabulary)
        assert extract(text, vocabulary) == {"Django", "AWS", "Docker", "PostgreSQL"}

    @pytest.mark.unit
    def test_independent_of_scan_order(self, vocabulary):
        reversed_vocabulary = SkillVocabulary(pairs=tuple(reversed(vocabulary.pairs)))
        text = "python pandas numpy machine learning report with tableau and sql"

        assert extract(text, vocabulary) == extract(text, reversed_vocabulary)

    @pytest.mark.unit
    def test_custom_vocabulary(self):
        vocab = SkillVocabulary.from_mapping({"k8s": "Kubernetes", "helm": None})
        assert extract("helm charts on k8s", vocab) == {"Kubernetes", "Helm"}


@pytest.mark.unit
def test_missing_from_is_case_insensitive_and_ordered():
    assert missing_from(["React", "Go", "react", "Rust"], ["go"]) == ["React", "Rust"]


class TestVocabulary:
    """Building and loading the synonym table."""

    @pytest.mark.unit
    def test_packaged_vocabulary_loads(self):
        vocab = load_vocabulary(PACKAGED_VOCABULARY)

        assert len(vocab) > 50
        assert vocab.canonical_for("nodejs") == "Node.js"
        assert {"React", "Python", "Docker"} <= vocab.canonical_names

    @pytest.mark.unit
    def test_vocabulary_is_cached(self):
        assert load_vocabulary(PACKAGED_VOCABULARY) is load_vocabulary(PACKAGED_VOCABULARY)

    @pytest.mark.unit
    def test_from_entries_mixed_forms(self):
        vocab = SkillVocabulary.from_entries(
            ["Docker", {"canonical": "Node.js", "synonyms": ["NodeJS", "node.js"]}, "docker"]
        )
        assert vocab.synonyms == ("docker", "nodejs", "node.js")
        assert vocab.canonical_for("docker") == "Docker"
        assert vocab.canonical_for("NODEJS") == "Node.js"

    @pytest.mark.unit
    def test_from_entries_rejects_invalid_entry(self):
        with pytest.raises(ValueError):
            SkillVocabulary.from_entries([{"canonical": "Nothing"}])

    @pytest.mark.unit
    def test_empty_vocabulary_rejected(self):
        with pytest.raises(ValueError):
            SkillVocabulary.from_entries([])

    @pytest.mark.unit
    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "vocab.yaml"
        path.write_text(
            "skills:\n"
            "  - terraform\n"
            "  - canonical: Go\n"
            "    synonyms: [golang, ' go ']\n"
        )
        clear_cache()

        vocab = load_vocabulary(path)

        assert vocab.pairs == (("terraform", None), ("golang", "Go"), (" go ", "Go"))
        assert extract("go is fun", vocab) == {"Go"}

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_vocabulary(tmp_path / "absent.yaml")
