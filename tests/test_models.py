import dataclasses
from datetime import datetime, timezone

import pytest

from cohost.models import Badges, ChatMessage, Sentiment


class TestChatMessage:

    def test_create_normalizes_missing_fields(self):
        message = ChatMessage.create(text="  hola  ", author=None, id=None)

        assert message.text == "hola"
        assert message.author == "Unknown"
        assert message.id
        assert message.timestamp.tzinfo is not None
        assert message.badges == Badges()

    def test_create_keeps_given_values(self):
        ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
        message = ChatMessage.create(text="gg", author="Ana", id="abc", timestamp=ts,
                                     badges={"moderator": "1", "premium": "1"})

        assert (message.id, message.author, message.timestamp) == ("abc", "Ana", ts)
        assert message.badges.moderator
        assert message.badges.is_elevated()

    def test_immutable(self):
        message = ChatMessage.create(text="gg")
        with pytest.raises(dataclasses.FrozenInstanceError):
            message.text = "otro"


class TestSentiment:

    def test_from_label(self):
        assert Sentiment.from_label("positive") is Sentiment.POSITIVE
        assert Sentiment.from_label("NEGATIVE") is Sentiment.NEGATIVE
        assert Sentiment.from_label("LABEL_1") is Sentiment.NEUTRAL
