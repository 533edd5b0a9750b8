"""Tests for keyword intent classification and parameter extraction."""

import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from companion.chat.intent import classify, extract_career, extract_skill
from companion.models.chat import Intent


class TestClassify:
    @pytest.mark.parametrize("text,intent", [
        ("gyms near me", Intent.PLACES),
        ("any libraries nearby?", Intent.PLACES),
        ("I want to become a pilot", Intent.CAREER),
        ("career options after BCom", Intent.CAREER),
        ("how do I learn Python", Intent.SKILL),
        ("improve my communication skills", Intent.SKILL),
        ("how to crack the CAT exam", Intent.EXAM),
        ("JEE mains tips", Intent.EXAM),
        ("GATE syllabus", Intent.EXAM),
        ("tell me a joke", Intent.GENERAL),
    ])
    def test_intents(self, text, intent):
        assert classify(text) == intent

    def test_career_beats_skill(self):
        assert classify("I want to learn to become a doctor") == Intent.CAREER

    def test_places_beats_everything(self):
        assert classify("coaching for JEE near me to become an engineer") == Intent.PLACES

    def test_skill_beats_exam(self):
        assert classify("learn shortcuts for the exam") == Intent.SKILL

    def test_case_insensitive(self):
        assert classify("NEARBY CAFES") == Intent.PLACES

    def test_substring_match(self):
        # "cat" inside "education" still routes to exam
        assert classify("what is education policy") == Intent.EXAM


class TestExtraction:
    def test_career_with_article(self):
        assert extract_career("I want to learn to become a doctor") == "doctor"

    def test_career_with_an(self):
        assert extract_career("How do I become an architect?") == "architect"

    def test_career_without_article(self):
        assert extract_career("become Pilot") == "Pilot"

    def test_career_no_match(self):
        assert extract_career("career options after 12th") is None

    def test_skill_learn(self):
        assert extract_skill("I want to learn python") == "python"

    def test_skill_improve_my(self):
        assert extract_skill("Improve my English please") == "English"

    def test_skill_no_match(self):
        assert extract_skill("which skills are in demand") is None
