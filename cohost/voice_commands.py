"""
配信者の音声コマンド処理モジュール
"""
from typing import Callable, Optional

from .config import AssistantConfig, Config
from utils.logger import get_logger

logger = get_logger(__name__)

STEP = 0.2

# 設定を変える発話（部分一致）
COMMAND_PHRASES = (
    'read chat', 'stop reading', 'volume up', 'volume down',
    'speak faster', 'speak slower', 'stop talking', 'say hello',
)


class VoiceCommandHandler:
    """音声コマンドで設定を変更する"""

    def __init__(self, config: AssistantConfig, stop_speaking: Callable[[], None],
                 channel: str = Config.TWITCH_CHANNEL):
        self.config = config
        self.stop_speaking = stop_speaking
        self.channel = channel

    def is_command(self, text: str) -> bool:
        lowered = text.lower()
        return any(phrase in lowered for phrase in COMMAND_PHRASES)

    def handle(self, command: str) -> Optional[str]:
        """
        コマンドを処理する

        Args:
            command: 認識された発話

        Returns:
            Optional[str]: 読み上げる返答。返答なし・未知のコマンドは None
        """
        lowered = command.lower()
        logger.info(f"音声コマンド: {command}")

        if 'read chat' in lowered:
            self.config.update(read_all_messages=True)
            return "I'll now read all chat messages"
        if 'stop reading' in lowered:
            self.config.update(read_all_messages=False)
            return "I'll now only read selected messages"
        if 'volume up' in lowered:
            self.config.update(voice_volume=self.config.voice_volume + STEP)
            return "Volume increased"
        if 'volume down' in lowered:
            self.config.update(voice_volume=self.config.voice_volume - STEP)
            return "Volume decreased"
        if 'speak faster' in lowered:
            self.config.update(voice_rate=self.config.voice_rate + STEP)
            return "Speaking faster now"
        if 'speak slower' in lowered:
            self.config.update(voice_rate=self.config.voice_rate - STEP)
            return "Speaking slower now"
        if 'stop talking' in lowered:
            self.stop_speaking()
            return None
        if 'say hello' in lowered:
            return f"Hello everyone! Welcome to {self.channel}'s stream!"

        return None
