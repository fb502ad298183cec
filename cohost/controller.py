"""
コントローラーモジュール
"""
import random
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from .admission import MessageFilter
from .composer import OpinionComposer
from .config import AssistantConfig, Config
from .conversation_memory import ConversationMemory
from .models import ChatMessage
from .processing_queue import ProcessingQueue
from .sentiment import SentimentResolver
from .speech import Speak
from .topics import TopicExtractor
from .voice_commands import VoiceCommandHandler
from utils.logger import get_logger

logger = get_logger(__name__)

WELCOME_MESSAGE = "AI Assistant is now online and ready to interact with {channel}'s chat!"
STREAMER_VOICE_AUTHOR = "Streamer (Voz)"


class AssistantController:
    """チャットコメンテーターのコントローラー"""

    def __init__(
        self,
        config: Optional[AssistantConfig] = None,
        speech=None,
        resolver: Optional[SentimentResolver] = None,
        memory: Optional[ConversationMemory] = None,
        rng: Optional[random.Random] = None,
        pacing_seconds: float = Config.MESSAGE_PACING_SECONDS,
        channel: str = Config.TWITCH_CHANNEL,
    ):
        """初期化"""
        self.config = config or AssistantConfig.from_env()
        self.channel = channel
        rng = rng or random.Random()

        topic_extractor = TopicExtractor()
        self.memory = memory or ConversationMemory(topic_extractor=topic_extractor)
        self.resolver = resolver or SentimentResolver()
        self.composer = OpinionComposer(self.memory, topic_extractor=topic_extractor, rng=rng)
        self.filter = MessageFilter(channel=channel, rng=rng)
        self.speech = speech if speech is not None else Speak()
        self.voice_commands = VoiceCommandHandler(self.config, self.speech.stop, channel=channel)
        self.queue = ProcessingQueue(self._process_message, pacing_seconds=pacing_seconds)

        self.recent_opinions: deque = deque(maxlen=Config.RECENT_OPINIONS_LIMIT)
        self.platform = Config.CHAT_PLATFORM
        self.is_active = False
        self._listener = None
        self._voice_listener = None

    async def start(self, platform: Optional[str] = None, video_id: Optional[str] = None) -> None:
        """
        アシスタントを開始する

        Args:
            platform: "twitch" または "youtube"（省略時は設定値）
            video_id: YouTubeの動画ID
        """
        if self.is_active:
            return

        self.platform = platform or self.platform
        try:
            self._listener = self._create_listener(video_id)
            await self._listener.start()

            self.is_active = True
            self.queue.start()

            if self.config.enable_stt and self.config.enable_voice:
                await self.start_voice_recognition()

            logger.info(f"アシスタントを開始しました: {self.platform}")
            await self.speak(WELCOME_MESSAGE.format(channel=self.channel))

        except Exception as e:
            logger.error(f"アシスタント開始エラー: {e}")
            self.is_active = False
            self.queue.stop()
            self._listener = None
            raise

    def _create_listener(self, video_id: Optional[str]):
        if self.platform == "twitch":
            from .twitch_listener import TwitchChatListener
            return TwitchChatListener(self.on_chat_message, channel=self.channel)
        if self.platform == "youtube":
            from .comment_listener import CommentListener
            video_id = video_id or Config.YOUTUBE_VIDEO_ID
            if not video_id:
                raise ValueError("A YouTube video id is required")
            return CommentListener(video_id, self.on_chat_message)
        raise ValueError(f"Invalid platform: {self.platform}")

    async def stop(self) -> None:
        """アシスタントを停止する"""
        self.is_active = False
        self.queue.stop()

        await self.stop_voice_recognition()
        self.speech.stop()

        if self._listener:
            await self._listener.stop()
            self._listener = None

        logger.info("アシスタントを停止しました")

    def on_chat_message(self, message: ChatMessage) -> None:
        """チャットトランスポートから1件ごとに呼ばれる"""
        if not self.is_active:
            return
        if self.filter.is_noise(message):
            return
        logger.info(f"Queued message from {message.author}: {message.text}")
        self.queue.enqueue(message)

    async def _process_message(self, message: ChatMessage) -> None:
        """個別メッセージの処理（読み上げ判定 → 感情 → 生成 → 発話）"""
        if not self.filter.should_announce(message, self.config):
            return

        await self.speak(f"{message.author} dice: {message.text}")

        if not self.config.generate_opinions:
            return

        opinion = await self.generate_opinion(message.text)
        self.recent_opinions.append({
            "id": message.id,
            "author": message.author,
            "message": message.text,
            "opinion": opinion,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        await self.speak(opinion)

    async def generate_opinion(self, text: str) -> str:
        """
        テキストに対するコメントを生成する

        Args:
            text: チャットの本文

        Returns:
            str: 生成されたコメント
        """
        sentiment = await self.resolver.resolve(text)
        opinion = self.composer.compose(text, sentiment)
        logger.info(f"コメントを生成しました: {opinion}")
        return opinion

    async def speak(self, text: str) -> None:
        """読み上げる（失敗しても処理は止めない）"""
        if not self.config.enable_tts:
            return
        try:
            await self.speech.speak(
                text,
                rate=self.config.voice_rate,
                pitch=self.config.voice_pitch,
                volume=self.config.voice_volume,
            )
        except Exception as e:
            logger.error(f"読み上げエラー: {e}")

    async def start_voice_recognition(self, mic_index: Optional[int] = None) -> None:
        """配信者の音声コマンド受付を開始する"""
        try:
            from .voice_listener import VoiceListener
            if self._voice_listener is None:
                self._voice_listener = VoiceListener(self.handle_voice_command)
            await self._voice_listener.start(mic_index)
        except Exception as e:
            logger.error(f"音声認識エラー: {e}")
            self._voice_listener = None

    async def stop_voice_recognition(self) -> None:
        if self._voice_listener:
            await self._voice_listener.stop()
            self._voice_listener = None

    async def handle_voice_command(self, command: str) -> None:
        """確定した発話を処理する。コマンド以外は配信者への感想として扱う"""
        if not self.voice_commands.is_command(command):
            await self.comment_on_streamer(command)
            return
        reply = self.voice_commands.handle(command)
        if reply:
            await self.speak(reply)

    async def comment_on_streamer(self, text: str) -> Optional[str]:
        """
        配信者の発話に感想を返す

        Args:
            text: 認識された発話

        Returns:
            Optional[str]: 生成されたコメント（生成が無効なら None）
        """
        if not self.config.generate_opinions:
            return None

        opinion = await self.generate_opinion(text)
        self.recent_opinions.append({
            "id": str(int(datetime.now(timezone.utc).timestamp() * 1000)),
            "author": STREAMER_VOICE_AUTHOR,
            "message": text,
            "opinion": opinion,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        await self.speak(f"Has dicho: {text}. Mi opinión: {opinion}")
        return opinion

    def update_config(self, **changes) -> AssistantConfig:
        self.config.update(**changes)
        logger.info(f"設定を更新しました: {self.config.to_dict()}")
        return self.config

    def get_config(self) -> dict:
        return self.config.to_dict()

    def get_voice_status(self) -> dict:
        """音声認識の状態を取得する"""
        if self._voice_listener:
            return self._voice_listener.get_status()
        return {"is_listening": False, "last_text": "", "error_count": 0, "mic_device": None}

    def get_status(self) -> dict:
        """状態を取得する"""
        return {
            "is_active": self.is_active,
            "is_connected": bool(self._listener and self._listener.is_connected()),
            "is_listening": bool(self._voice_listener and self._voice_listener.is_listening),
            "queue_length": len(self.queue),
            "channel": self._listener.channel if self._listener else self.channel,
            "platform": self.platform,
        }
