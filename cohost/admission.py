"""
メッセージ選別モジュール
"""
import random
import re
from typing import Optional, Sequence

from .config import AssistantConfig, Config
from .models import ChatMessage
from utils.logger import get_logger

logger = get_logger(__name__)

BOT_NAMES = ['nightbot', 'streamelements', 'streamlabs', 'moobot', 'fossabot']

ATTENTION_WORDS = [
    'streamer', 'hey', 'question', 'love', 'great', 'awesome',
    'game', 'play', 'music', 'song', 'opinion', 'think', 'favorite'
]

EMOTE_ONLY = re.compile(r"^:[a-zA-Z0-9_]+:$")

ANNOUNCE_PROBABILITY = 0.3
MEANINGFUL_LENGTH = 10


class MessageFilter:
    """コメントを読む価値があるかを判定する"""

    def __init__(self, channel: str = Config.TWITCH_CHANNEL,
                 attention_words: Optional[Sequence[str]] = None,
                 rng: Optional[random.Random] = None):
        words = list(attention_words if attention_words is not None else ATTENTION_WORDS)
        if channel and channel.lower() not in words:
            words.insert(0, channel.lower())
        self.attention_words = words
        self.rng = rng or random.Random()

    def is_noise(self, message: ChatMessage) -> bool:
        """
        ボット・短すぎる発言・エモートのみの発言を除外する

        Args:
            message: チャットメッセージ

        Returns:
            bool: ノイズなら True
        """
        author = message.author.lower()
        if any(bot in author for bot in BOT_NAMES):
            logger.info(f"ボットのメッセージを除外しました: {message.author}")
            return True

        text = message.text.strip()
        if len(text) < 2:
            logger.info(f"短すぎるメッセージを除外しました: {message.text!r}")
            return True

        if EMOTE_ONLY.match(text):
            logger.info(f"エモートのみのメッセージを除外しました: {message.text!r}")
            return True

        return False

    def should_announce(self, message: ChatMessage, config: AssistantConfig) -> bool:
        """
        読み上げるかどうかを判定する

        Args:
            message: ノイズ判定を通過したメッセージ
            config: 現在のアシスタント設定

        Returns:
            bool: 読み上げるなら True
        """
        if config.read_all_messages:
            return True

        text = message.text.lower()

        # 呼びかけや関心ワード
        if any(word in text for word in self.attention_words):
            return True

        # 質問
        if '?' in message.text:
            return True

        # 長めのコメントはときどき拾う
        if len(message.text.strip()) > MEANINGFUL_LENGTH and self.rng.random() < ANNOUNCE_PROBABILITY:
            return True

        return message.badges.is_elevated()
