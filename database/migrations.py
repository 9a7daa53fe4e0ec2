"""Database schema migrations."""

from __future__ import annotations

from .connection import OptimizedSQLitePool


SCHEMA_SQL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS wordle_daily_words (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        word_date TEXT UNIQUE NOT NULL,
        word TEXT NOT NULL,
        letters TEXT NOT NULL,
        source TEXT NOT NULL DEFAULT 'api',
        created_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS wordle_account_links (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        participant_id TEXT UNIQUE NOT NULL,
        external_username TEXT NOT NULL,
        linked_at TEXT NOT NULL,
        last_verified_at TEXT,
        verified INTEGER NOT NULL DEFAULT 0
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS wordle_submissions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        participant_id TEXT NOT NULL,
        submission_date TEXT NOT NULL,
        achievement_ids TEXT NOT NULL,
        achievement_refs TEXT NOT NULL,
        validation_state TEXT NOT NULL DEFAULT 'pending',
        validation_message TEXT,
        submitted_at TEXT NOT NULL,
        validated_at TEXT,
        revision INTEGER NOT NULL DEFAULT 1,
        UNIQUE (participant_id, submission_date)
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_submissions_date ON wordle_submissions(submission_date, validation_state);",
    """
    CREATE TABLE IF NOT EXISTS wordle_progress (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        participant_id TEXT UNIQUE NOT NULL,
        successful_count INTEGER NOT NULL DEFAULT 0,
        total_count INTEGER NOT NULL DEFAULT 0,
        last_submission_date TEXT,
        eligible_for_prize INTEGER NOT NULL DEFAULT 0,
        prize_notified INTEGER NOT NULL DEFAULT 0,
        updated_at TEXT NOT NULL
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_progress_eligible ON wordle_progress(eligible_for_prize, prize_notified);",
)


async def run_migrations(pool: OptimizedSQLitePool) -> None:
    async with pool.connection() as conn:
        await conn.execute("BEGIN")
        try:
            for statement in SCHEMA_SQL:
                await conn.execute(statement)
        except Exception:
            await conn.rollback()
            raise
        else:
            await conn.commit()
