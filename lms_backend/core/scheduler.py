from apscheduler.jobstores.base import ConflictingIdError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from lms_backend.core.revocation import get_revocation_cache
from lms_backend.db.repositories.auth import AuthRepository
from lms_backend.db.session import AsyncSessionLocal
from lms_backend.libs.formats.datetime import now as get_now

scheduler = AsyncIOScheduler()


# ================================
# JOB 1: Purge expired OTP rows
# ================================
async def purge_otp_job():
    logger.info("🔎 Running expired OTP purge...")

    async with AsyncSessionLocal() as session:
        repository = AuthRepository(session)
        try:
            removed = await repository.purge_expired_otps(get_now())
            await session.commit()
            logger.success(f"✔ Purged {removed} expired OTP(s)")
        except Exception as e:
            await session.rollback()
            logger.error(f"❌ OTP purge job error: {e}")


# ================================
# JOB 2: Purge expired revoked tokens
# ================================
async def purge_revocation_job():
    removed = get_revocation_cache().purge_expired()
    logger.success(f"✔ Purged {removed} expired revoked token(s)")


# ================================
# START ALL JOBS
# ================================
def start_scheduler():
    jobs = (
        (purge_otp_job, IntervalTrigger(minutes=10), "purge_otp_job"),
        (purge_revocation_job, IntervalTrigger(minutes=30), "purge_revocation_job"),
    )
    for func, trigger, job_id in jobs:
        try:
            scheduler.add_job(
                func,
                trigger=trigger,
                id=job_id,
                replace_existing=True,
                max_instances=1,
            )
        except ConflictingIdError:
            logger.warning(f"⚠ {job_id} existed")

    scheduler.start()
    logger.info("🔔 Scheduler started (OTP purge + revocation purge)")
