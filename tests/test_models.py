"""
Tests for the models module.
"""

import json

import pytest
from pydantic import ValidationError

from hn_probe.models import Comment, Story


class TestStory:
    """Tests for the Story model."""

    def test_full_story(self, sample_item):
        """Test reading every story field."""
        story = Story.model_validate(sample_item)

        assert story.id == 12345
        assert story.type == "story"
        assert story.title == "Test Story"
        assert story.kids == [1001, 1002, 1003]
        assert story.descendants == 4
        assert story.has_kids
        assert story.has_url
        assert not story.is_dead

    def test_missing_fields_stay_missing(self):
        """Absent fields are None, never a zero-like default."""
        story = Story.model_validate({"id": 1})

        assert story.score is None
        assert story.dead is None
        assert story.kids is None
        assert story.descendants is None

    def test_zero_score_is_not_missing(self):
        """A score of zero is kept distinct from an absent score."""
        assert Story.model_validate({"id": 1, "score": 0}).score == 0

    def test_missing_dead_reads_as_not_dead(self):
        """Missing dead flag is treated as not dead by the convenience view."""
        assert Story.model_validate({"id": 1}).is_dead is False
        assert Story.model_validate({"id": 1, "dead": False}).dead is False
        assert Story.model_validate({"id": 1, "dead": True}).is_dead is True

    def test_empty_kids_and_url(self):
        """Empty kids and url count as absent for the convenience views."""
        story = Story.model_validate({"id": 1, "kids": [], "url": ""})
        assert not story.has_kids
        assert not story.has_url

    def test_unknown_fields_ignored(self):
        """Fields outside the schema are dropped without error."""
        story = Story.model_validate({"id": 1, "shiny_new_field": {"a": 1}})
        assert story.id == 1
        assert not hasattr(story, "shiny_new_field")

    def test_id_required(self):
        """An item without an id cannot be read."""
        with pytest.raises(ValidationError):
            Story.model_validate({"type": "story", "title": "No id"})

    def test_immutable(self, sample_item):
        """Stories cannot be modified after decoding."""
        story = Story.model_validate(sample_item)
        with pytest.raises(ValidationError):
            story.score = 1

    def test_decoding_is_idempotent(self, sample_item):
        """Decoding, re-encoding and decoding again yields an equal record."""
        first = Story.model_validate(dict(sample_item, unknown="x"))
        second = Story.model_validate(json.loads(first.model_dump_json()))
        assert first == second
        assert Story.model_validate(sample_item) == Story.model_validate(sample_item)

    def test_str(self, sample_item):
        """Test the short string form used in log lines."""
        assert str(Story.model_validate(sample_item)) == "Story(id=12345, title='Test Story', by='testuser', score=120)"


class TestComment:
    """Tests for the Comment model."""

    def test_comment(self, sample_comments):
        """Test reading a comment."""
        comment = Comment.model_validate(sample_comments[0])

        assert comment.id == 1001
        assert comment.type == "comment"
        assert comment.parent == 12345
        assert comment.kids == [1004]

    def test_deleted_comment(self):
        """Deleted comments carry little more than an id."""
        comment = Comment.model_validate({"id": 5, "deleted": True, "parent": 1, "time": 10, "type": "comment"})
        assert comment.deleted is True
        assert comment.by is None
        assert comment.text is None

    def test_str_truncates_text(self):
        """Long comment text is shortened in the string form."""
        comment = Comment.model_validate({"id": 5, "text": "x" * 80})
        assert "x" * 50 + "..." in str(comment)
        assert "x" * 51 not in str(comment)
