"""Base repository pattern for database operations."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import aiosqlite

from core.exceptions import RepositoryError
from database.connection import get_db_pool


class BaseRepository:
    """Base repository with common database operations.

    Every helper converts driver errors into :class:`RepositoryError` so
    services only have to handle one persistence exception type.
    """

    @staticmethod
    async def execute(query: str, params: Sequence[Any] = ()) -> int:
        """Execute a write query and return the number of affected rows."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            try:
                cursor = await conn.execute(query, params)
                await conn.commit()
                return cursor.rowcount
            except aiosqlite.Error as e:
                await conn.rollback()
                raise RepositoryError(str(e)) from e

    @staticmethod
    async def fetch_one(query: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        """Fetch a single row."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            try:
                cursor = await conn.execute(query, params)
                return await cursor.fetchone()
            except aiosqlite.Error as e:
                raise RepositoryError(str(e)) from e

    @staticmethod
    async def fetch_all(query: str, params: Sequence[Any] = ()) -> List[aiosqlite.Row]:
        """Fetch all rows."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            try:
                cursor = await conn.execute(query, params)
                return list(await cursor.fetchall())
            except aiosqlite.Error as e:
                raise RepositoryError(str(e)) from e

    @staticmethod
    async def write_then_read(
        write: Tuple[str, Sequence[Any]],
        read: Tuple[str, Sequence[Any]],
    ) -> Optional[aiosqlite.Row]:
        """Run one write statement and re-read the affected row in one transaction.

        ``BEGIN IMMEDIATE`` takes the write lock up front, so no other
        connection can change the row between the write and the read; the
        caller sees exactly the row its own write produced.
        """
        pool = get_db_pool()
        async with pool.connection() as conn:
            try:
                await conn.execute("BEGIN IMMEDIATE")
                await conn.execute(*write)
                cursor = await conn.execute(*read)
                row = await cursor.fetchone()
                await conn.commit()
                return row
            except aiosqlite.Error as e:
                await conn.rollback()
                raise RepositoryError(str(e)) from e
