"""
データモデルモジュール
"""
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional


class Sentiment(str, Enum):
    """感情ラベル"""
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"

    @classmethod
    def from_label(cls, label: str) -> "Sentiment":
        """
        外部分類器のラベルを変換する

        未知のラベルは NEUTRAL として扱う。

        Args:
            label: 分類器が返したラベル

        Returns:
            Sentiment: 対応する感情
        """
        try:
            return cls(str(label).upper())
        except ValueError:
            return cls.NEUTRAL


class Topic(str, Enum):
    """話題タグ"""
    GAMING = "gaming"
    STREAMING = "streaming"
    MUSIC = "music"
    CHAT = "chat"
    ENGAGEMENT = "engagement"
    SKILL = "skill"
    GREETING = "greeting"
    QUESTION = "question"
    HUMOR = "humor"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Badges:
    """チャット上の役割フラグ"""
    subscriber: bool = False
    vip: bool = False
    moderator: bool = False
    broadcaster: bool = False

    @classmethod
    def from_mapping(cls, badges: Optional[Mapping[str, Any]]) -> "Badges":
        if not badges:
            return cls()
        return cls(
            subscriber=bool(badges.get("subscriber") or badges.get("founder")),
            vip=bool(badges.get("vip")),
            moderator=bool(badges.get("moderator")),
            broadcaster=bool(badges.get("broadcaster")),
        )

    def is_elevated(self) -> bool:
        return self.subscriber or self.vip or self.moderator or self.broadcaster


@dataclass(frozen=True)
class ChatMessage:
    """チャットメッセージデータクラス"""
    id: str
    author: str
    text: str
    timestamp: datetime
    badges: Badges = field(default_factory=Badges)
    source: str = "twitch"  # "twitch" or "youtube"

    @classmethod
    def create(
        cls,
        *,
        text: Optional[str],
        author: Optional[str] = None,
        id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
        badges: Optional[Mapping[str, Any]] = None,
        source: str = "twitch",
    ) -> "ChatMessage":
        """
        トランスポートから届いた値を正規化してメッセージを作る

        Args:
            text: 本文（前後の空白は除去される）
            author: 表示名。空なら "Unknown"
            id: メッセージID。空なら現在時刻から生成
            timestamp: 受信時刻。空なら現在時刻
            badges: バッジ情報（名前 → 値）
            source: 配信元

        Returns:
            ChatMessage: 正規化済みメッセージ
        """
        return cls(
            id=str(id) if id else str(int(time.time() * 1000)),
            author=(author or "").strip() or "Unknown",
            text=(text or "").strip(),
            timestamp=timestamp or datetime.now(timezone.utc),
            badges=Badges.from_mapping(badges),
            source=source,
        )


@dataclass(frozen=True)
class ConversationEntry:
    """会話履歴の1件"""
    message: str
    response: str
    timestamp: float
