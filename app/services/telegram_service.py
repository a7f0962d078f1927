"""
Telegram bot bridge

Long-polls the Bot API with httpx and links a client's chat to their record when
they send "/start <reference code>". One bot runs per process.
"""
import asyncio
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.database import get_async_session_context
from app.repositories.client import ClientRepository

logger = logging.getLogger(__name__)

START_WITH_CODE = re.compile(r"^/start\s+([A-Za-z0-9]+)$")

WELCOME_TEXT = (
    "Merhaba! DietTrackerPro botuna hoş geldiniz. "
    'Diyetisyeninizden aldığınız bağlantı kodunu "/start KODUNUZ" şeklinde gönderiniz.'
)
LINKED_TEXT = "Bağlantınız başarıyla kuruldu! Artık diyetisyeninizden mesaj alabilirsiniz."
INVALID_CODE_TEXT = "Referans kodunuz geçersiz. Lütfen diyetisyeninizden doğru kodu isteyin."
LINK_ERROR_TEXT = "Bir hata oluştu. Lütfen tekrar deneyin veya diyetisyeninize başvurun."
RELAY_ONLY_TEXT = (
    "DietTrackerPro botu şu anda sadece diyetisyeninizden gelen mesajları iletmek için kullanılmaktadır. "
    "Lütfen diyetisyeninizle telefon veya e-posta üzerinden iletişime geçin."
)


class TelegramBotError(Exception):
    """Bot API returned ok=false or could not be reached."""


class TelegramService:
    """
    Bot lifecycle (initialize/stop), update handling and outgoing messages
    """

    def __init__(
        self,
        session_factory: Callable = get_async_session_context,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        api_base: str = settings.TELEGRAM_API_BASE,
        poll_timeout: int = settings.TELEGRAM_POLL_TIMEOUT,
        idle_interval: float = 1.0,
    ):
        """
        Args:
            session_factory: async context manager yielding a DB session for the poller
            transport: httpx transport override (tests use httpx.MockTransport)
            poll_timeout: getUpdates long-poll timeout (seconds)
            idle_interval: pause after an empty or failed poll (seconds)
        """
        self.session_factory = session_factory
        self.transport = transport
        self.api_base = api_base.rstrip("/")
        self.poll_timeout = poll_timeout
        self.idle_interval = idle_interval
        self.client_repo = ClientRepository()

        self.token: Optional[str] = None
        self.bot_username: Optional[str] = None
        self._http: Optional[httpx.AsyncClient] = None
        self._task: Optional[asyncio.Task] = None
        self._offset = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _call(self, method: str, **params) -> Any:
        if self._http is None or self.token is None:
            raise TelegramBotError("Bot başlatılmadı")

        try:
            response = await self._http.post(f"{self.api_base}/bot{self.token}/{method}", json=params)
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TelegramBotError(f"{method} failed: {e}") from e

        if not data.get("ok"):
            raise TelegramBotError(data.get("description") or f"{method} failed")
        return data.get("result")

    async def initialize(self, token: str) -> None:
        """
        Validates the token with getMe and starts the polling task.
        A running bot is stopped first.

        Raises:
            TelegramBotError: the token was rejected
        """
        await self.stop()

        self.token = token
        self._http = httpx.AsyncClient(transport=self.transport, timeout=self.poll_timeout + 10)
        try:
            me = await self._call("getMe")
        except TelegramBotError:
            await self._close()
            raise

        self.bot_username = me.get("username")
        self._offset = 0
        self._task = asyncio.create_task(self.run())
        logger.info(f"Telegram bot started: @{self.bot_username}")

    async def run(self):
        """
        getUpdates loop; each update is handled in order and acknowledged via offset.
        """
        logger.info("Telegram polling started")
        try:
            while True:
                try:
                    updates = await self._call(
                        "getUpdates", offset=self._offset, timeout=self.poll_timeout
                    )
                except TelegramBotError as e:
                    logger.error(f"Telegram polling error: {e}")
                    await asyncio.sleep(self.idle_interval)
                    continue

                for update in updates or []:
                    self._offset = max(self._offset, update["update_id"] + 1)
                    try:
                        await self.handle_update(update)
                    except Exception as e:
                        logger.error(f"Telegram update {update.get('update_id')} failed: {e}", exc_info=True)

                if not updates:
                    await asyncio.sleep(self.idle_interval)

        except asyncio.CancelledError:
            logger.info("Telegram polling stopped")
            raise

    async def handle_update(self, update: Dict[str, Any]) -> None:
        message = update.get("message")
        if not message or "chat" not in message:
            return

        chat_id = message["chat"]["id"]
        text = (message.get("text") or "").strip()

        if text == "/start":
            await self.send_message(chat_id, WELCOME_TEXT)
            return

        match = START_WITH_CODE.match(text)
        if match:
            try:
                linked = await self.link_chat(chat_id, match.group(1))
            except Exception as e:
                logger.error(f"Linking chat {chat_id} failed: {e}")
                await self.send_message(chat_id, LINK_ERROR_TEXT)
                return
            await self.send_message(chat_id, LINKED_TEXT if linked else INVALID_CODE_TEXT)
            return

        if not text.startswith("/start"):
            await self.send_message(chat_id, RELAY_ONLY_TEXT)

    async def link_chat(self, chat_id: int, reference_code: str) -> bool:
        """Stores the chat id on the client holding the reference code."""
        async with self.session_factory() as db:
            client = await self.client_repo.get_by_reference_code(db, reference_code.upper())
            if not client:
                logger.warning(f"Unknown reference code from chat {chat_id}: {reference_code}")
                return False
            await self.client_repo.update(db, client, {"telegram_chat_id": str(chat_id)})

        logger.info(f"Chat {chat_id} linked to client {client.client_id}")
        return True

    async def send_message(self, chat_id: int | str, text: str) -> bool:
        try:
            await self._call("sendMessage", chat_id=chat_id, text=text)
            return True
        except TelegramBotError as e:
            logger.error(f"sendMessage to {chat_id} failed: {e}")
            return False

    async def send_message_to_clients(
        self, db: AsyncSession, client_ids: Sequence[int], message: str, user_id: int
    ) -> Dict[str, List[int]]:
        """
        Sends the message to every linked client of the user.
        Unknown, foreign or unlinked clients and failed sends end up in "failed".
        """
        clients = {c.client_id: c for c in await self.client_repo.get_many(db, client_ids)}
        result: Dict[str, List[int]] = {"success": [], "failed": []}

        for client_id in client_ids:
            client = clients.get(client_id)
            if not client or client.user_id != user_id or not client.telegram_chat_id:
                result["failed"].append(client_id)
                continue
            sent = await self.send_message(client.telegram_chat_id, message)
            result["success" if sent else "failed"].append(client_id)

        logger.info(f"Telegram broadcast: {len(result['success'])} sent, {len(result['failed'])} failed")
        return result

    async def _close(self):
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def stop(self):
        """Cancels polling and closes the HTTP client."""
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None
            logger.info("Telegram bot stopped")
        await self._close()


_telegram_service: TelegramService | None = None


def get_telegram_service() -> TelegramService:
    global _telegram_service
    if _telegram_service is None:
        _telegram_service = TelegramService()
    return _telegram_service
