"""
Twitchチャットリスナーモジュール
"""
import asyncio
from typing import Awaitable, Callable, Optional, Union

from twitchio.ext import commands

from .config import Config
from .models import ChatMessage
from utils.logger import get_logger

logger = get_logger(__name__)

MessageCallback = Callable[[ChatMessage], Union[Awaitable[None], None]]


async def dispatch(callback: MessageCallback, message: ChatMessage) -> None:
    result = callback(message)
    if asyncio.iscoroutine(result):
        await result


def to_chat_message(message) -> ChatMessage:
    """twitchio のメッセージを ChatMessage に変換する"""
    tags = getattr(message, 'tags', None) or {}
    author = getattr(message, 'author', None)
    name = (
        tags.get('display-name')
        or getattr(author, 'display_name', None)
        or getattr(author, 'name', None)
    )
    badges = getattr(author, 'badges', None) or {}
    return ChatMessage.create(
        id=tags.get('id') or getattr(message, 'id', None),
        author=name,
        text=getattr(message, 'content', None),
        timestamp=getattr(message, 'timestamp', None),
        badges=badges,
        source="twitch",
    )


class _ChatBot(commands.Bot):
    """チャンネルに参加してメッセージを受け取るだけのボット"""

    def __init__(self, listener: "TwitchChatListener", token: str, channel: str):
        super().__init__(token=token, prefix="!", initial_channels=[channel])
        self._listener = listener

    async def event_ready(self):
        logger.info(f"Twitchにログインしました: {self.nick}")
        self._listener.mark_ready()

    async def event_message(self, message):
        await self._listener.handle(message)


class TwitchChatListener:
    """Twitchチャットリスナー"""

    def __init__(self, on_message: MessageCallback, channel: str = Config.TWITCH_CHANNEL,
                 token: Optional[str] = Config.TWITCH_TOKEN, nick: str = Config.TWITCH_NICK,
                 connect_timeout: float = Config.TWITCH_CONNECT_TIMEOUT):
        """
        初期化

        Args:
            on_message: メッセージごとに1回呼ばれるコールバック
            channel: 参加するチャンネル
            token: OAuthトークン
            nick: ボット自身のユーザー名（自分の発言を無視するため）
            connect_timeout: 接続完了を待つ秒数
        """
        self._on_message = on_message
        self._channel = channel
        self._token = token
        self._nick = (nick or "").lower()
        self._bot: Optional[_ChatBot] = None
        self._task: Optional[asyncio.Task] = None
        self.connected = False
        self._ready: Optional[asyncio.Event] = None
        self.connect_timeout = connect_timeout

    @property
    def channel(self) -> str:
        return self._channel

    def is_connected(self) -> bool:
        return self.connected

    def mark_ready(self) -> None:
        """ボットの接続完了時に呼ばれる"""
        self.connected = True
        if self._ready is not None:
            self._ready.set()

    async def start(self) -> None:
        """
        チャットに接続する

        Raises:
            ValueError: トークンが未設定の場合
            ConnectionError: 接続に失敗した場合
        """
        if not self._token:
            raise ValueError("TWITCH_TOKEN is required to connect to Twitch chat")

        logger.info(f"Twitchチャンネルに接続します: {self._channel}")
        self._ready = asyncio.Event()
        self._bot = _ChatBot(self, token=self._token, channel=self._channel)
        self._task = asyncio.create_task(self._bot.start())
        self._task.add_done_callback(self._on_task_done)

        ready = asyncio.create_task(self._ready.wait())
        done, _ = await asyncio.wait(
            {self._task, ready}, timeout=self.connect_timeout, return_when=asyncio.FIRST_COMPLETED
        )
        if ready in done:
            return

        ready.cancel()
        error = None
        if self._task in done and not self._task.cancelled():
            error = self._task.exception()
        await self.stop()
        if error is not None:
            raise ConnectionError(f"Could not connect to Twitch: {error}") from error
        raise ConnectionError("Could not connect to Twitch: no response from server")

    def _on_task_done(self, task: asyncio.Task) -> None:
        self.connected = False
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Twitch接続エラー: {error}")

    async def stop(self) -> None:
        """切断する"""
        self.connected = False
        if self._bot:
            try:
                await self._bot.close()
            except Exception as e:
                logger.error(f"Twitch切断エラー: {e}")
            self._bot = None

        if self._task:
            if not self._task.done():
                self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except Exception:
                # 例外は _on_task_done で記録済み
                pass
            self._task = None
        logger.info("Twitchから切断しました")

    async def handle(self, message) -> None:
        """受信メッセージを1件処理する"""
        # 自分の発言は無視する
        if getattr(message, 'echo', False):
            return
        author = getattr(message, 'author', None)
        if author is not None and self._nick and (getattr(author, 'name', '') or '').lower() == self._nick:
            return

        try:
            chat_message = to_chat_message(message)
            logger.info(f"[{chat_message.author}]: {chat_message.text}")
            await dispatch(self._on_message, chat_message)
        except Exception as e:
            logger.error(f"Twitchメッセージ処理エラー: {e}")
