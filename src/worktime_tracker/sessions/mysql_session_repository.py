from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)

_COLUMNS = "session_id, employee_id, started_at, ended_at"


def _to_session(row: dict) -> WorkSession:
    return WorkSession(
        session_id=int(row["session_id"]),
        employee_id=int(row["employee_id"]),
        started_at=row["started_at"],
        ended_at=row.get("ended_at"),
    )


class MySQLSessionRepository(SessionRepository):
    """work_sessions table.

    The generated column open_flag is 1 for open rows and NULL otherwise;
    UNIQUE(employee_id, open_flag) rejects a second open session.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_sessions WHERE session_id=%s", (int(session_id),))
            row = fetchone(cur)
            return _to_session(row) if row else None

    def get_open(self, employee_id: int) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_sessions
                WHERE employee_id=%s AND ended_at IS NULL
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_session(row) if row else None

    def list_open(self) -> Sequence[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_sessions WHERE ended_at IS NULL ORDER BY started_at ASC")
            return [_to_session(r) for r in fetchall(cur)]

    def create_open(self, *, employee_id: int, started_at: datetime) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO work_sessions(employee_id, started_at)
                    VALUES(%s,%s)
                    """,
                    (int(employee_id), started_at),
                )
            except IntegrityError as e:
                if e.errno != errorcode.ER_DUP_ENTRY:
                    raise
                logger.info("Open session already stored for employee %s", employee_id)
                return None
            return WorkSession(
                session_id=int(cur.lastrowid),
                employee_id=int(employee_id),
                started_at=started_at,
                ended_at=None,
            )

    def close_open(self, *, session_id: int, ended_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_sessions
                SET ended_at=%s
                WHERE session_id=%s AND ended_at IS NULL AND started_at <= %s
                """,
                (ended_at, int(session_id), ended_at),
            )
            return cur.rowcount > 0

    def list_overlapping(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[int] = None,
    ) -> Sequence[WorkSession]:
        clauses = ["started_at < %s", "(ended_at IS NULL OR ended_at > %s)"]
        params: list[object] = [end, start]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_sessions
                WHERE {where}
                ORDER BY started_at ASC, session_id ASC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]
