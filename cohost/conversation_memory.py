"""
会話メモリモジュール
"""
import time
from collections import deque
from typing import Callable, List, Optional

from .config import Config
from .models import ConversationEntry
from .topics import TopicExtractor
from utils.logger import get_logger

logger = get_logger(__name__)


def _long_words(text: str) -> set:
    return {word for word in text.lower().split() if len(word) > 2}


def similarity(text_a: str, text_b: str) -> float:
    """
    2つのメッセージの単語の重なり（0〜1）

    3文字以上の単語だけを、大文字小文字を区別せずに比べる。
    同じ単語の繰り返しは1語として数える。

    Args:
        text_a: 比較するテキスト
        text_b: 比較するテキスト

    Returns:
        float: 共通する単語数 / 単語数の多い方
    """
    words_a = _long_words(text_a)
    words_b = _long_words(text_b)
    longest = max(len(words_a), len(words_b))
    if longest == 0:
        return 0.0
    return len(words_a & words_b) / longest


class ConversationMemory:
    """発言と返したコメントの履歴（件数に上限あり）"""

    def __init__(
        self,
        history_capacity: int = Config.HISTORY_CAPACITY,
        response_capacity: int = Config.RESPONSE_HISTORY_CAPACITY,
        topic_capacity: int = Config.RECENT_TOPICS_CAPACITY,
        topic_extractor: Optional[TopicExtractor] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.entries: deque = deque(maxlen=history_capacity)
        # dict は挿入順を保つので、古い順に捨てる集合として使う
        self._responses: dict = {}
        self._topics: dict = {}
        self.response_capacity = response_capacity
        self.topic_capacity = topic_capacity
        self.topic_extractor = topic_extractor or TopicExtractor()
        self.clock = clock

    def record(self, message: str, response: str, template: Optional[str] = None) -> ConversationEntry:
        """
        メッセージと返したコメントを記録する

        Args:
            message: チャットの本文
            response: 返したコメント（装飾後）
            template: 元にした候補。重複判定はこちらで行う（省略時は response）

        Returns:
            ConversationEntry: 追加した履歴
        """
        entry = ConversationEntry(message=message, response=response, timestamp=self.clock())
        self.entries.append(entry)

        self._remember(self._responses, template or response, self.response_capacity)
        for topic in sorted(self.topic_extractor.extract(message), key=lambda t: t.value):
            self._remember(self._topics, topic, self.topic_capacity)

        logger.debug(f"会話を記録しました（{len(self.entries)} 件）")
        return entry

    @staticmethod
    def _remember(bucket: dict, key, capacity: int) -> None:
        bucket[key] = None
        while len(bucket) > capacity:
            del bucket[next(iter(bucket))]

    def similar_entries(
        self,
        text: str,
        window_seconds: float = Config.REPEAT_WINDOW_SECONDS,
        threshold: float = Config.SIMILARITY_THRESHOLD,
    ) -> List[ConversationEntry]:
        """window_seconds 以内の履歴のうち、類似度が threshold を超えるもの"""
        now = self.clock()
        return [
            entry for entry in self.entries
            if now - entry.timestamp <= window_seconds and similarity(text, entry.message) > threshold
        ]

    def was_used(self, response: str) -> bool:
        return response in self._responses

    @property
    def used_responses(self) -> List[str]:
        return list(self._responses)

    @property
    def recent_topics(self) -> list:
        return list(self._topics)

    def clear(self) -> None:
        self.entries.clear()
        self._responses.clear()
        self._topics.clear()
