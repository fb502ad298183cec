"""
オピニオン生成モジュール
"""
import random
from typing import List, Optional

from .config import Config
from .conversation_memory import ConversationMemory
from .models import Sentiment
from .templates import (
    DISCOURSE_MARKERS,
    FALLBACK_RESPONSES,
    HEDGING_SUFFIXES,
    REPEAT_TOPIC_RESPONSES,
    SENTIMENT_RESPONSES,
    TOPIC_RESPONSES,
)
from .topics import TopicExtractor
from utils.logger import get_logger

logger = get_logger(__name__)

MARKER_PROBABILITY = 0.3
SUFFIX_PROBABILITY = 0.2


class OpinionComposer:
    """メッセージに対するコメントを選ぶ"""

    def __init__(
        self,
        memory: ConversationMemory,
        topic_extractor: Optional[TopicExtractor] = None,
        rng: Optional[random.Random] = None,
        repeat_window_seconds: float = Config.REPEAT_WINDOW_SECONDS,
        similarity_threshold: float = Config.SIMILARITY_THRESHOLD,
    ):
        """
        初期化

        Args:
            memory: 会話履歴（このクラスが書き込む）
            topic_extractor: 話題抽出器
            rng: 乱数源。テストでは決定的なものを渡す
            repeat_window_seconds: 繰り返し判定の時間幅
            similarity_threshold: 繰り返し判定の類似度しきい値
        """
        self.memory = memory
        self.topic_extractor = topic_extractor or TopicExtractor()
        self.rng = rng or random.Random()
        self.repeat_window_seconds = repeat_window_seconds
        self.similarity_threshold = similarity_threshold

    def compose(self, message: str, sentiment: Sentiment) -> str:
        """
        コメントを生成して履歴に記録する

        Args:
            message: チャットの本文
            sentiment: 本文の感情

        Returns:
            str: 生成されたコメント（失敗時は汎用の返答）
        """
        try:
            pool = self._candidate_pool(message, sentiment)
            template = self.rng.choice(self._unused(pool))
            response = self._decorate(template)
            self.memory.record(message, response, template=template)
            return response
        except Exception as e:
            logger.error(f"コメント生成エラー: {e}")
            return self.rng.choice(FALLBACK_RESPONSES)

    def _candidate_pool(self, message: str, sentiment: Sentiment) -> List[str]:
        similar = self.memory.similar_entries(message, self.repeat_window_seconds, self.similarity_threshold)
        if similar:
            logger.info(f"同じ話題の繰り返しを検出しました（類似 {len(similar)} 件）")
            return REPEAT_TOPIC_RESPONSES

        pool: List[str] = []
        for topic in sorted(self.topic_extractor.extract(message), key=lambda t: t.value):
            for template in TOPIC_RESPONSES.get(topic, []):
                if template not in pool:
                    pool.append(template)
        if pool:
            return pool

        return SENTIMENT_RESPONSES.get(sentiment, SENTIMENT_RESPONSES[Sentiment.NEUTRAL])

    def _unused(self, pool: List[str]) -> List[str]:
        # 全部使い切ったら元のプールに戻す
        fresh = [template for template in pool if not self.memory.was_used(template)]
        return fresh or list(pool)

    def _decorate(self, response: str) -> str:
        if self.rng.random() < MARKER_PROBABILITY:
            response = f"{self.rng.choice(DISCOURSE_MARKERS)} {response.lower()}"
        if self.rng.random() < SUFFIX_PROBABILITY:
            response = f"{response}{self.rng.choice(HEDGING_SUFFIXES)}"
        return response
