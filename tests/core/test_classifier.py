"""
Test suite for the keyword classifier.

System role: Verification of chunk metadata enrichment
"""

from portfolio_rag.core.classifier import classify, extract_tags
from portfolio_rag.models.classification import (
    Category,
    Classification,
    ContentType,
    Importance,
)


class TestClassify:
    """Test suite for classify."""

    def test_classify_should_detect_skill_content(self) -> None:
        result = classify("skills.txt", "Strong programming background in Python and Rust.")

        assert result.content_type == ContentType.SKILL
        assert result.importance == Importance.HIGH

    def test_classify_should_use_rule_order_when_several_match(self) -> None:
        # "skill" rules come before "project" rules
        result = classify("notes.md", "Skills I used on this project: React")

        assert result.content_type == ContentType.SKILL

    def test_classify_should_detect_category(self) -> None:
        result = classify("work.md", "Wrote Solidity smart contracts for a DeFi protocol")

        assert result.category == Category.BLOCKCHAIN

    def test_classify_should_use_file_name(self) -> None:
        result = classify("education.md", "Graduated in 2019.")

        assert result.content_type == ContentType.EDUCATION

    def test_classify_should_mark_hobbies_low_importance(self) -> None:
        result = classify("hobbies.txt", "I enjoy climbing and chess.")

        assert result.importance == Importance.LOW

    def test_classify_should_fall_back_to_defaults(self) -> None:
        result = classify("notes.txt", "The weather was nice today.")

        assert result == Classification()
        assert result.content_type == ContentType.GENERAL
        assert result.category == Category.GENERAL
        assert result.importance == Importance.MEDIUM
        assert result.tags == []


class TestExtractTags:
    """Test suite for extract_tags."""

    def test_extract_tags_should_return_vocabulary_order(self) -> None:
        tags = extract_tags("Built with Docker, FastAPI and Python")

        assert tags == ["python", "fastapi", "docker"]

    def test_extract_tags_should_be_case_insensitive(self) -> None:
        assert extract_tags("TYPESCRIPT and Next.js") == ["typescript", "next.js"]
