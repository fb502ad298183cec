"""
音声認識リスナーモジュール
SpeechRecognition（Google Web Speech）で配信者の発話を拾う
"""
import asyncio
from typing import Awaitable, Callable, Optional, Union

import speech_recognition as sr

from .config import Config
from utils.logger import get_logger

logger = get_logger(__name__)

TranscriptCallback = Callable[[str], Union[Awaitable[None], None]]


class VoiceListener:
    """マイク入力を確定テキストに変換するリスナー"""

    def __init__(self, on_transcript: TranscriptCallback, language: str = Config.VOICE_LANGUAGE,
                 max_errors: int = Config.MAX_VOICE_ERRORS):
        """
        初期化

        Args:
            on_transcript: 確定したテキストを受け取るコールバック
            language: 認識言語
            max_errors: 連続エラーの上限
        """
        self._on_transcript = on_transcript
        self.language = language
        self.recognizer = sr.Recognizer()
        self._stop_listening: Optional[Callable] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        # 音声認識の状態
        self.is_listening = False
        self.last_text = ""
        self.mic_device_index: Optional[int] = None

        # エラーカウンター
        self.error_count = 0
        self.max_errors = max_errors

    @staticmethod
    def list_microphones():
        """利用可能なマイクデバイスのリストを取得"""
        return [
            {"index": index, "name": name}
            for index, name in enumerate(sr.Microphone.list_microphone_names())
        ]

    async def start(self, mic_index: Optional[int] = None) -> None:
        """
        音声認識を開始する

        Args:
            mic_index: 使用するマイクのインデックス（Noneの場合はデフォルト）
        """
        if self.is_listening:
            return

        self._loop = asyncio.get_running_loop()
        self.mic_device_index = mic_index

        try:
            microphone = sr.Microphone(device_index=mic_index)
            with microphone as source:
                self.recognizer.adjust_for_ambient_noise(source)
            self._stop_listening = self.recognizer.listen_in_background(microphone, self._on_audio)
            self.is_listening = True
            logger.info("音声認識を開始しました")
        except Exception as e:
            logger.error(f"音声認識エラー: {e}")
            raise

    async def stop(self) -> None:
        """音声認識を停止する"""
        if self._stop_listening:
            self._stop_listening(wait_for_stop=False)
            self._stop_listening = None
        self.is_listening = False
        logger.info("音声認識を停止しました")

    def _on_audio(self, recognizer: sr.Recognizer, audio: sr.AudioData) -> None:
        """バックグラウンドスレッドから呼ばれる"""
        try:
            text = recognizer.recognize_google(audio, language=self.language)
        except sr.UnknownValueError:
            return
        except sr.RequestError as e:
            self.error_count += 1
            logger.error(f"音声認識リクエストエラー: {e}")
            if self.error_count >= self.max_errors and self._loop:
                logger.error("認識エラーが多すぎるため音声認識を停止します")
                asyncio.run_coroutine_threadsafe(self.stop(), self._loop)
            return

        self.error_count = 0
        if self._loop:
            asyncio.run_coroutine_threadsafe(self._deliver(text), self._loop)

    async def _deliver(self, text: str) -> None:
        text = text.strip()
        if not text:
            return
        self.last_text = text
        logger.info(f"認識結果: {text}")
        result = self._on_transcript(text)
        if asyncio.iscoroutine(result):
            await result

    def get_status(self) -> dict:
        """音声認識の状態を取得"""
        return {
            "is_listening": self.is_listening,
            "last_text": self.last_text,
            "error_count": self.error_count,
            "mic_device": self.mic_device_index
        }
