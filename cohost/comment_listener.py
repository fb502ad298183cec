"""
YouTubeコメントリスナーモジュール
"""
import asyncio
from datetime import datetime, timezone

import pytchat

from .models import ChatMessage
from .twitch_listener import MessageCallback, dispatch
from utils.logger import get_logger

logger = get_logger(__name__)


def to_chat_message(item) -> ChatMessage:
    """pytchat のチャット項目を ChatMessage に変換する"""
    # タイムスタンプを安全に処理
    timestamp = datetime.now(timezone.utc)
    raw_timestamp = getattr(item, 'timestamp', None)
    if raw_timestamp:
        try:
            timestamp = datetime.fromtimestamp(raw_timestamp / 1000, timezone.utc)
        except (ValueError, OSError, TypeError):
            pass

    author = getattr(item, 'author', None)
    return ChatMessage.create(
        id=getattr(item, 'id', None),
        author=getattr(author, 'name', None),
        text=getattr(item, 'message', None),
        timestamp=timestamp,
        badges={
            "subscriber": getattr(author, 'isChatSponsor', False),
            "moderator": getattr(author, 'isChatModerator', False),
            "broadcaster": getattr(author, 'isChatOwner', False),
        },
        source="youtube",
    )


class CommentListener:
    """YouTubeコメントリスナー"""

    def __init__(self, video_id: str, on_message: MessageCallback):
        """
        初期化

        Args:
            video_id: 動画ID
            on_message: メッセージごとに呼ばれるコールバック
        """
        self._running = False
        self._on_message = on_message
        self._video_id = video_id
        self._chat = None
        self._task = None

    @property
    def channel(self) -> str:
        return self._video_id

    def is_connected(self) -> bool:
        return bool(self._running and self._chat and self._chat.is_alive())

    async def start(self) -> None:
        """コメント監視を開始する"""
        self._running = True

        try:
            self._chat = pytchat.create(video_id=self._video_id, interruptable=False)
            self._task = asyncio.create_task(self._listen_comments())
            logger.info(f"コメント監視を開始しました: {self._video_id}")

        except Exception as e:
            logger.error(f"コメント監視開始エラー: {e}")
            self._running = False
            raise

    async def stop(self) -> None:
        """コメント監視を停止する"""
        self._running = False
        if self._chat:
            self._chat.terminate()
        logger.info("コメント監視を停止しました")

    async def _listen_comments(self) -> None:
        """コメントを監視する"""
        while self._running:
            try:
                if not self._chat or not self._chat.is_alive():
                    logger.error("チャットが開始されていません")
                    await asyncio.sleep(5)
                    continue

                for item in self._chat.get().sync_items():
                    try:
                        await dispatch(self._on_message, to_chat_message(item))
                    except Exception as e:
                        logger.error(f"コメント処理エラー: {e}")

                # ポーリング間隔
                await asyncio.sleep(1)

            except Exception as e:
                logger.error(f"コメント監視エラー: {e}")
                await asyncio.sleep(5)
