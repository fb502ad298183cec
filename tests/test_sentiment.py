from unittest.mock import MagicMock, patch

import pytest
import requests

from cohost.models import Sentiment
from cohost.sentiment import SentimentResolver, detect_local_sentiment


def api_response(status=200, body=None, json_error=None):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.reason = "OK" if response.ok else "Error"
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


class TestLocalSentiment:

    def test_positive(self):
        assert detect_local_sentiment("Qué GENIAL, me gusta 🔥") == Sentiment.POSITIVE

    def test_negative(self):
        assert detect_local_sentiment("esto es horrible") == Sentiment.NEGATIVE

    def test_neutral_without_hits(self):
        assert detect_local_sentiment("hola a todos") == Sentiment.NEUTRAL

    def test_tie_is_neutral(self):
        assert detect_local_sentiment("bueno pero aburrido") == Sentiment.NEUTRAL


class TestSentimentResolver:

    @pytest.mark.asyncio
    async def test_network_error_falls_back_to_lexicon(self):
        resolver = SentimentResolver(api_url="http://sentiment.test/api/sentiment")
        with patch("cohost.sentiment.requests.post", side_effect=requests.ConnectionError("down")):
            assert await resolver.resolve("esto es horrible") == Sentiment.NEGATIVE

    @pytest.mark.asyncio
    async def test_error_status_falls_back(self):
        resolver = SentimentResolver(api_url="http://sentiment.test/api/sentiment")
        with patch("cohost.sentiment.requests.post", return_value=api_response(503)):
            assert await resolver.resolve("qué genial") == Sentiment.POSITIVE

    @pytest.mark.asyncio
    async def test_malformed_body_falls_back(self):
        resolver = SentimentResolver(api_url="http://sentiment.test/api/sentiment")
        with patch("cohost.sentiment.requests.post", return_value=api_response(json_error=ValueError("bad"))):
            assert await resolver.resolve("esto es horrible") == Sentiment.NEGATIVE
        with patch("cohost.sentiment.requests.post", return_value=api_response(body={"label": "x"})):
            assert await resolver.resolve("esto es horrible") == Sentiment.NEGATIVE

    @pytest.mark.asyncio
    async def test_remote_label_is_trusted(self):
        resolver = SentimentResolver(api_url="http://sentiment.test/api/sentiment")
        body = {"sentiment": "positive", "confidence": 0.12, "fallback": False}
        with patch("cohost.sentiment.requests.post", return_value=api_response(body=body)) as post:
            assert await resolver.resolve("esto es horrible") == Sentiment.POSITIVE

        post.assert_called_once()
        assert post.call_args.kwargs["json"] == {"text": "esto es horrible"}

    @pytest.mark.asyncio
    async def test_unknown_remote_label_is_neutral(self):
        resolver = SentimentResolver(api_url="http://sentiment.test/api/sentiment")
        with patch("cohost.sentiment.requests.post", return_value=api_response(body={"sentiment": "LABEL_2"})):
            assert await resolver.resolve("qué genial") == Sentiment.NEUTRAL

    @pytest.mark.asyncio
    async def test_without_remote_uses_lexicon(self):
        resolver = SentimentResolver(api_url=None)
        with patch("cohost.sentiment.requests.post") as post:
            assert await resolver.resolve("qué genial") == Sentiment.POSITIVE
        post.assert_not_called()
