# propguard/adapters/repos/base.py
from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Insert

from ...domain.errors import StoreError


def insert_if_absent(
    session: AsyncSession,
    model: type,
    values: dict[str, Any],
    index_elements: list[str],
) -> Insert:
    """
    INSERT ... ON CONFLICT (index_elements) DO NOTHING for the session's dialect.

    The conflict target must be a primary key or unique constraint. Callers
    re-read by key afterwards, so whoever loses a race gets the winner's row.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
    elif dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
    else:
        raise StoreError(f"conditional insert is not supported on dialect {dialect!r}")
    return stmt.on_conflict_do_nothing(index_elements=index_elements)
