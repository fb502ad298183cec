"""
設定管理モジュール
"""
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# 環境変数の読み込み
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


class Config:
    """設定管理クラス"""

    # Chat transport
    CHAT_PLATFORM = os.getenv("CHAT_PLATFORM", "twitch")  # "twitch" or "youtube"
    TWITCH_TOKEN = os.getenv("TWITCH_TOKEN")
    TWITCH_NICK = os.getenv("TWITCH_NICK", "")
    TWITCH_CHANNEL = os.getenv("TWITCH_CHANNEL", "habbi3")
    TWITCH_CONNECT_TIMEOUT = float(os.getenv("TWITCH_CONNECT_TIMEOUT", "15"))
    YOUTUBE_VIDEO_ID = os.getenv("YOUTUBE_VIDEO_ID")

    # Sentiment
    SENTIMENT_API_URL = os.getenv("SENTIMENT_API_URL", "http://localhost:8000/api/sentiment")
    SENTIMENT_API_TIMEOUT = _env_optional_float("SENTIMENT_API_TIMEOUT")  # None: no timeout
    HUGGINGFACE_API_URL = os.getenv("HUGGINGFACE_API_URL", "https://api-inference.huggingface.co/models")
    HUGGINGFACE_API_TOKEN = os.getenv("HUGGINGFACE_API_TOKEN")
    HUGGINGFACE_SENTIMENT_MODEL = os.getenv(
        "HUGGINGFACE_SENTIMENT_MODEL", "cardiffnlp/twitter-roberta-base-sentiment-latest"
    )

    # Server Settings
    CONTROL_API_HOST = os.getenv("CONTROL_API_HOST", "localhost")
    CONTROL_API_PORT = int(os.getenv("CONTROL_API_PORT", "8000"))

    # Conversation memory
    HISTORY_CAPACITY = 50
    RESPONSE_HISTORY_CAPACITY = 100
    RECENT_TOPICS_CAPACITY = 20
    REPEAT_WINDOW_SECONDS = 5 * 60
    SIMILARITY_THRESHOLD = 0.7

    # Processing queue
    MESSAGE_PACING_SECONDS = float(os.getenv("MESSAGE_PACING_SECONDS", "1.0"))
    RECENT_OPINIONS_LIMIT = 50

    # 音声設定
    VOICE_LANGUAGE = os.getenv("VOICE_LANGUAGE", "es-ES")
    VOICE_BASE_WPM = int(os.getenv("VOICE_BASE_WPM", "180"))
    MAX_VOICE_ERRORS = 5

    # Assistant defaults
    READ_ALL_MESSAGES = _env_bool("READ_ALL_MESSAGES", "false")
    GENERATE_OPINIONS = _env_bool("GENERATE_OPINIONS", "true")
    ENABLE_TTS = _env_bool("ENABLE_TTS", "true")
    ENABLE_STT = _env_bool("ENABLE_STT", "false")
    ENABLE_VOICE = _env_bool("ENABLE_VOICE", "true")
    VOICE_RATE = float(os.getenv("VOICE_RATE", "1"))
    VOICE_PITCH = float(os.getenv("VOICE_PITCH", "1"))
    VOICE_VOLUME = float(os.getenv("VOICE_VOLUME", "0.8"))

    @classmethod
    def validate(cls):
        """設定の検証"""
        if cls.CHAT_PLATFORM not in ("twitch", "youtube"):
            raise ValueError(f"Invalid CHAT_PLATFORM: {cls.CHAT_PLATFORM}")

        required_vars = ["TWITCH_TOKEN"] if cls.CHAT_PLATFORM == "twitch" else ["YOUTUBE_VIDEO_ID"]
        missing_vars = [var for var in required_vars if not getattr(cls, var)]
        if missing_vars:
            raise ValueError(f"Missing required environment variables: {', '.join(missing_vars)}")


VOLUME_RANGE = (0.1, 1.0)
RATE_RANGE = (0.5, 2.0)


def clamp(value: float, bounds: tuple) -> float:
    low, high = bounds
    return max(low, min(high, value))


@dataclass
class AssistantConfig:
    """実行中に変更できるアシスタント設定"""
    read_all_messages: bool = False
    generate_opinions: bool = True
    voice_rate: float = 1.0
    voice_pitch: float = 1.0
    voice_volume: float = 0.8
    enable_tts: bool = True
    enable_stt: bool = False
    enable_voice: bool = True

    @classmethod
    def from_env(cls) -> "AssistantConfig":
        return cls(
            read_all_messages=Config.READ_ALL_MESSAGES,
            generate_opinions=Config.GENERATE_OPINIONS,
            voice_rate=clamp(Config.VOICE_RATE, RATE_RANGE),
            voice_pitch=Config.VOICE_PITCH,
            voice_volume=clamp(Config.VOICE_VOLUME, VOLUME_RANGE),
            enable_tts=Config.ENABLE_TTS,
            enable_stt=Config.ENABLE_STT,
            enable_voice=Config.ENABLE_VOICE,
        )

    def update(self, **changes: Any) -> "AssistantConfig":
        """
        設定を更新する

        Args:
            **changes: 更新するフィールドと値

        Returns:
            AssistantConfig: 自分自身

        Raises:
            ValueError: 未知のフィールドが含まれる場合
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown config fields: {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            if value is None:
                continue
            if name == "voice_volume":
                value = clamp(float(value), VOLUME_RANGE)
            elif name == "voice_rate":
                value = clamp(float(value), RATE_RANGE)
            setattr(self, name, value)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
