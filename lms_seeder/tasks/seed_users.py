"""
LMS Seeder - Administrative/test accounts

Upserts a fixed set of accounts keyed on lower-cased email, so re-running
overwrites the existing rows instead of duplicating them.
Per-record failures are logged and reported but never abort the batch.
"""
import logging
from typing import Sequence

from lms_seeder.core.config import Settings
from lms_seeder.core.security import hash_password
from lms_seeder.core.store import StoreClient, WriteFailure
from lms_seeder.schemas.user import SeedReport, UserRole, UserSeed

logger = logging.getLogger(__name__)

SEED_USERS = (
    UserSeed(email="superadmin@sh.com", full_name="Super Admin", role=UserRole.SUPER_ADMIN.value),
    UserSeed(email="admin@sh.com", full_name="Admin User", role=UserRole.ADMIN.value),
    UserSeed(email="learner@sh.com", full_name="Learner User", role=UserRole.STUDENT.value),
)


async def seed_users(
    store: StoreClient,
    password_hash: str,
    users: Sequence[UserSeed] = SEED_USERS,
    table: str = "users",
) -> SeedReport:
    """Upsert each user in order, awaiting every write before the next."""
    report = SeedReport()
    for user in users:
        try:
            rows = await store.upsert(table, [user.to_row(password_hash)], on_conflict="email")
        except WriteFailure as exc:
            logger.error("Error upserting user %s: %s", user.email, exc.message)
            report.failed[user.email] = exc.message
            continue

        written = rows[0] if rows else user.model_dump()
        logger.info("Seeded/updated: %s - %s", written.get("email"), written.get("role"))
        report.succeeded.append(user.email)
    return report


async def run(settings: Settings, store: StoreClient | None = None) -> SeedReport:
    # One hash per run, shared by every seeded account
    password_hash = hash_password(settings.SEED_PASSWORD, rounds=settings.BCRYPT_ROUNDS)

    if store is not None:
        return await seed_users(store, password_hash, table=settings.USERS_TABLE)
    async with StoreClient(settings) as client:
        return await seed_users(client, password_hash, table=settings.USERS_TABLE)
