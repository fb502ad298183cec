"""
メッセージ処理キューモジュール
"""
import asyncio
from collections import deque
from typing import Awaitable, Callable, Optional

from .config import Config
from .models import ChatMessage
from utils.logger import get_logger

logger = get_logger(__name__)

MessageHandler = Callable[[ChatMessage], Awaitable[None]]


class ProcessingQueue:
    """受け付けたメッセージを1件ずつ、間隔をあけて処理する"""

    def __init__(self, handler: MessageHandler,
                 pacing_seconds: float = Config.MESSAGE_PACING_SECONDS,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        """
        初期化

        Args:
            handler: 1件分の処理（感情判定 → 生成 → 発話）
            pacing_seconds: 処理後の待ち時間
            sleep: 待機関数（テスト用に差し替え可能）
        """
        self._handler = handler
        self._pending: deque = deque()
        self._processing = False
        self._active = False
        self._task: Optional[asyncio.Task] = None
        self.pacing_seconds = pacing_seconds
        self._sleep = sleep

    def start(self) -> None:
        self._active = True

    def stop(self) -> None:
        """停止する。処理中の1件は最後まで進み、残りは破棄する"""
        self._active = False
        dropped = len(self._pending)
        self._pending.clear()
        if dropped:
            logger.info(f"キューのメッセージを {dropped} 件破棄しました")

    def enqueue(self, message: ChatMessage) -> None:
        """メッセージを追加し、処理中でなければ処理を開始する"""
        if not self._active:
            return
        self._pending.append(message)
        if not self._processing:
            self._processing = True
            self._task = asyncio.create_task(self._drain())

    async def _drain(self) -> None:
        try:
            while self._pending and self._active:
                message = self._pending.popleft()
                try:
                    await self._handler(message)
                except Exception as e:
                    logger.error(f"メッセージ処理エラー ({message.id}): {e}")
                # 連続処理を避けるための間隔
                await self._sleep(self.pacing_seconds)
        finally:
            self._processing = False
            if not self._active:
                self._pending.clear()

    async def wait_idle(self) -> None:
        """現在の処理が終わるまで待つ"""
        if self._task:
            await self._task

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def is_active(self) -> bool:
        return self._active
