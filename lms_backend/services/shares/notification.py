# lms_backend/services/shares/notification.py
import asyncio
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from lms_backend.core.settings import settings

OtpSender = Callable[[str, str], Awaitable[Any]]


@dataclass
class OtpEmailJob:
    email: str
    code: str


class EmailOutbox:
    """Bounded queue of outbound OTP emails drained by background workers.

    Request handlers only enqueue; delivery, retries and failures happen off
    the request path and are visible through the log and the counters.
    """

    def __init__(
        self,
        sender: Optional[OtpSender] = None,
        maxsize: int | None = None,
        workers: int | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
    ):
        self._sender = sender
        self._queue: asyncio.Queue[OtpEmailJob] = asyncio.Queue(
            maxsize=maxsize if maxsize is not None else settings.EMAIL_QUEUE_SIZE
        )
        self._worker_count = workers or settings.EMAIL_WORKERS
        self.max_retries = max_retries or settings.EMAIL_MAX_RETRIES
        self.backoff_seconds = (
            backoff_seconds
            if backoff_seconds is not None
            else settings.EMAIL_RETRY_BACKOFF_SECONDS
        )
        self._workers: list[asyncio.Task] = []
        self.sent = 0
        self.failed = 0
        self.dropped = 0

    @property
    def sender(self) -> OtpSender:
        if self._sender is None:
            from lms_backend.services.shares.mailer import get_mailer_service

            self._sender = get_mailer_service().send_otp_email
        return self._sender

    @property
    def running(self) -> bool:
        return bool(self._workers)

    def enqueue_otp(self, email: str, code: str) -> bool:
        """Never raises; a full queue drops the job with a warning."""
        try:
            self._queue.put_nowait(OtpEmailJob(email=email, code=code))
            return True
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(f"⚠ Email outbox full, dropping OTP email to {email}")
            return False

    async def start(self) -> None:
        if self._workers:
            return
        self._workers = [
            asyncio.create_task(self._run(i), name=f"email-outbox-{i}")
            for i in range(self._worker_count)
        ]
        logger.info(f"📧 Email outbox started with {self._worker_count} worker(s)")

    async def stop(self, drain_timeout: float = 5.0) -> None:
        if not self._workers:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"⚠ Email outbox stopped with {self._queue.qsize()} pending email(s)"
            )
        for task in self._workers:
            task.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        logger.info("📧 Email outbox stopped")

    async def join(self) -> None:
        await self._queue.join()

    async def _run(self, index: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.deliver(job)
            finally:
                self._queue.task_done()

    async def deliver(self, job: OtpEmailJob) -> bool:
        for attempt in range(1, self.max_retries + 1):
            try:
                await self.sender(job.email, job.code)
                self.sent += 1
                logger.success(f"✔ OTP email sent to {job.email}")
                return True
            except Exception as e:
                logger.warning(
                    f"⚠ OTP email to {job.email} failed "
                    f"(attempt {attempt}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries:
                    await asyncio.sleep(self.backoff_seconds * 2 ** (attempt - 1))

        self.failed += 1
        logger.error(f"❌ Giving up on OTP email to {job.email}")
        return False


@lru_cache(maxsize=1)
def get_email_outbox() -> EmailOutbox:
    return EmailOutbox()
