"""
感情判定モジュール
"""
import asyncio
from functools import partial
from typing import Optional

import requests

from .config import Config
from .models import Sentiment
from utils.logger import get_logger

logger = get_logger(__name__)

POSITIVE_WORDS = [
    'genial', 'increíble', 'fantástico', 'excelente', 'bueno', 'bien', 'perfecto',
    'amor', 'me gusta', 'hermoso', 'divertido', 'feliz', 'alegre', 'cool',
    'jajaja', 'jeje', 'lol', 'xd', '😂', '😍', '❤️', '👍', '🔥'
]

NEGATIVE_WORDS = [
    'malo', 'terrible', 'horrible', 'odio', 'aburrido', 'feo', 'estúpido',
    'idiota', 'basura', 'mierda', 'pendejo', 'molesto', 'triste', 'enojado',
    'wtf', 'shit', '😡', '👎', '💩', '😭'
]


class SentimentServiceError(Exception):
    """感情判定APIの呼び出し失敗"""


def detect_local_sentiment(text: str) -> Sentiment:
    """
    単語リストによる簡易感情判定

    Args:
        text: 判定するテキスト

    Returns:
        Sentiment: ヒット数の多い側。同数なら NEUTRAL
    """
    lowered = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)

    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


class SentimentResolver:
    """リモート分類器を優先し、失敗したらローカル判定に切り替える"""

    def __init__(self, api_url: Optional[str] = Config.SENTIMENT_API_URL,
                 timeout: Optional[float] = Config.SENTIMENT_API_TIMEOUT):
        self.api_url = api_url
        self.timeout = timeout

    async def resolve(self, text: str) -> Sentiment:
        """
        感情を判定する（例外は外に出さない）

        Args:
            text: 判定するテキスト

        Returns:
            Sentiment: 判定結果
        """
        if self.api_url:
            try:
                sentiment = await self._analyze_remote(text)
                logger.info(f"感情を判定しました: {sentiment.value}")
                return sentiment
            except Exception as e:
                logger.warning(f"感情分析に失敗したためローカル判定を使います: {e}")

        sentiment = detect_local_sentiment(text)
        logger.info(f"ローカル判定の感情: {sentiment.value}")
        return sentiment

    async def _analyze_remote(self, text: str) -> Sentiment:
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(
            None,
            partial(requests.post, self.api_url, json={"text": text}, timeout=self.timeout),
        )

        if not response.ok:
            raise SentimentServiceError(f"Sentiment API returned {response.status_code}: {response.reason}")

        try:
            result = response.json()
        except ValueError as e:
            raise SentimentServiceError(f"Invalid JSON from sentiment API: {e}") from e

        if not isinstance(result, dict) or not isinstance(result.get("sentiment"), str):
            raise SentimentServiceError(f"Unexpected sentiment API response format: {result}")

        return Sentiment.from_label(result["sentiment"])
