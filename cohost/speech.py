"""
発話管理モジュール
"""
import asyncio
import concurrent.futures
from typing import Optional

import pyttsx3

from .config import Config
from utils.logger import get_logger

logger = get_logger(__name__)


class SpeechUnavailableError(Exception):
    """音声合成エンジンが使えない"""


class Speak:
    """pyttsx3 による読み上げ

    エンジンは毎回ワーカースレッド上で生成する（SAPI5 は生成したスレッドでしか動かない）
    """

    def __init__(self, language: str = Config.VOICE_LANGUAGE, base_wpm: int = Config.VOICE_BASE_WPM):
        """初期化"""
        self.language = language
        self.base_wpm = base_wpm
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        self._engine = None
        self._available = False
        self._voice_id: Optional[str] = None
        self._is_speaking = False
        self._executor.submit(self._load_engine).result()

    def _load_engine(self):
        """ワーカースレッドでエンジンを試しに生成し、声を選ぶ（失敗しても例外は出さない）"""
        try:
            engine = pyttsx3.init()
            self._voice_id = self._pick_voice(engine)
            self._available = True
            logger.info("音声合成エンジンを読み込みました")
        except Exception as e:
            self._available = False
            logger.warning(f"音声合成が利用できません: {e}")

    def _pick_voice(self, engine) -> Optional[str]:
        """スペイン語の声を優先し、なければ英語、それもなければ既定の声"""
        voices = engine.getProperty('voices') or []
        prefix = self.language.split('-')[0].lower()

        def matches(voice, lang: str) -> bool:
            languages = [
                lang_code.decode(errors="ignore") if isinstance(lang_code, bytes) else str(lang_code)
                for lang_code in (getattr(voice, 'languages', None) or [])
            ]
            return any(lang in code.lower() for code in languages) or lang in (voice.id or '').lower()

        for lang in (prefix, 'en'):
            for voice in voices:
                if matches(voice, lang):
                    logger.info(f"使用する声: {voice.name}")
                    return voice.id
        return None

    def is_available(self) -> bool:
        return self._available

    def is_speaking(self) -> bool:
        """発話状態を取得する"""
        return self._is_speaking

    async def speak(self, text: str, rate: float = 1.0, pitch: float = 1.0, volume: float = 0.8) -> None:
        """
        テキストを読み上げる

        Args:
            text: 読み上げるテキスト
            rate: 速度の倍率
            pitch: 音の高さ（対応しないドライバでは無視）
            volume: 音量（0.0-1.0）

        Raises:
            SpeechUnavailableError: エンジンが使えない場合
        """
        if not self.is_available():
            raise SpeechUnavailableError("Speech synthesis not supported")

        loop = asyncio.get_running_loop()
        self._is_speaking = True
        try:
            await loop.run_in_executor(self._executor, self._speak_sync, text, rate, pitch, volume)
        finally:
            self._is_speaking = False

    def _speak_sync(self, text: str, rate: float, pitch: float, volume: float) -> None:
        logger.info(f"TTS: {text}")
        engine = pyttsx3.init()
        self._engine = engine
        try:
            engine.setProperty('rate', int(self.base_wpm * rate))
            engine.setProperty('volume', volume)
            if self._voice_id:
                engine.setProperty('voice', self._voice_id)
            if pitch != 1.0:
                logger.debug("このドライバは音の高さの変更に対応していません")
            engine.say(text)
            engine.runAndWait()
        finally:
            self._engine = None

    def stop(self) -> None:
        """現在の発話を止める"""
        engine = self._engine
        if engine is not None:
            try:
                engine.stop()
            except Exception as e:
                logger.error(f"発話停止エラー: {e}")
        self._is_speaking = False

    def shutdown(self) -> None:
        self.stop()
        self._executor.shutdown(wait=False)
