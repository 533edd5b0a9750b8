"""Tests for mood scoring and check-in persistence."""

from unittest.mock import AsyncMock

import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from companion.models.mood import MoodEntry, MoodLabel, MoodSubmission
from companion.mood import QUESTIONS, SUGGESTIONS, compute_mood, mood_label, submit_mood
from companion.providers.store import InMemoryMoodStore


class TestThresholds:
    @pytest.mark.parametrize("answers,label", [
        ([1, 1, 1, 1, 1, 1], MoodLabel.STRESSED),
        ([2, 2, 2, 2, 2, 2], MoodLabel.STRESSED),      # avg 2.0
        ([3, 3, 3, 3, 3, 3], MoodLabel.TIRED),         # avg 3.0
        ([3, 3, 3, 4, 4, 4], MoodLabel.NEUTRAL),       # avg 3.5
        ([4, 4, 4, 4, 4, 4], MoodLabel.MOTIVATED),     # avg 4.0
        ([5, 5, 5, 5, 5, 5], MoodLabel.MOTIVATED),
    ])
    def test_label_for_answers(self, answers, label):
        assert compute_mood(answers).label == label

    def test_just_above_two_is_tired(self):
        assert mood_label(2.01) == MoodLabel.TIRED

    def test_three_is_tired_not_neutral(self):
        assert mood_label(3.0) == MoodLabel.TIRED

    def test_just_below_four_is_neutral(self):
        assert mood_label(3.99) == MoodLabel.NEUTRAL

    def test_uneven_answers(self):
        # avg = 13/6 ≈ 2.17
        result = compute_mood([1, 2, 3, 2, 2, 3])
        assert result.label == MoodLabel.TIRED
        assert result.score == pytest.approx(13 / 6)


class TestMoodResult:
    def test_four_suggestions_per_label(self):
        for label in MoodLabel:
            assert len(SUGGESTIONS[label]) == 4

    def test_suggestions_match_label(self):
        result = compute_mood([1, 1, 2, 2, 1, 1])
        assert result.suggestions == SUGGESTIONS[MoodLabel.STRESSED]
        assert "Try deep breathing exercises" in result.suggestions

    def test_idempotent(self):
        answers = [4, 3, 5, 2, 4, 3]
        assert compute_mood(answers) == compute_mood(answers)

    def test_suggestions_are_copies(self):
        result = compute_mood([3] * 6)
        result.suggestions.append("extra")
        assert len(SUGGESTIONS[MoodLabel.TIRED]) == 4

    def test_six_questions(self):
        assert len(QUESTIONS) == 6


class TestSubmission:
    def test_default_answers(self):
        assert MoodSubmission().answers == [3] * 6

    def test_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            MoodSubmission(answers=[3, 3, 3])

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            MoodSubmission(answers=[3, 3, 3, 3, 3, 6])

    @pytest.mark.asyncio
    async def test_saves_entry_for_user(self):
        store = InMemoryMoodStore()
        result = await submit_mood([4] * 6, uid="u1", store=store)

        entry = await store.latest("u1")
        assert entry is not None
        assert entry.mood_label == result.label == MoodLabel.MOTIVATED
        assert entry.mood_score == 4.0
        assert entry.answers == [4] * 6
        assert "T" in entry.timestamp  # ISO-8601

    @pytest.mark.asyncio
    async def test_anonymous_not_saved(self):
        store = AsyncMock()
        await submit_mood([3] * 6, uid=None, store=store)
        store.append.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_does_not_affect_result(self):
        store = AsyncMock()
        store.append.side_effect = RuntimeError("store offline")

        result = await submit_mood([1] * 6, uid="u1", store=store)

        assert result.label == MoodLabel.STRESSED
        store.append.assert_awaited_once()

    def test_entry_serializes_store_keys(self):
        entry = MoodEntry(
            uid="u1", timestamp="2026-01-01T00:00:00+00:00",
            answers=[3] * 6, mood_score=3.0, mood_label=MoodLabel.TIRED,
        )
        data = entry.model_dump(mode="json", by_alias=True)
        assert set(data) == {"uid", "timestamp", "answers", "moodScore", "moodLabel"}
        assert data["moodLabel"] == "tired"
