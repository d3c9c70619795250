from __future__ import annotations

from pathlib import Path
from typing import Any

import duckdb

EXPORTED_MARTS: tuple[tuple[str, str], ...] = (
    ("mart_sessions", "sessions"),
    ("mart_assignments", "assignments"),
)


class ExportService:
    def __init__(self, analytics_db: Path) -> None:
        self.analytics_db = analytics_db

    def export_history(self, output_dir: Path) -> list[Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        outputs: list[Path] = []
        with duckdb.connect(str(self.analytics_db)) as conn:
            for table, stem in EXPORTED_MARTS:
                outputs.extend(self._export_table(conn, table, output_dir / stem))
        return outputs

    def _export_table(self, conn: Any, table: str, stem: Path) -> list[Path]:
        csv_path = stem.with_suffix(".csv")
        parquet_path = stem.with_suffix(".parquet")
        conn.execute(f"COPY (SELECT * FROM {table} ORDER BY ALL) TO {_sql_literal(csv_path)} (HEADER, DELIMITER ',')")
        conn.execute(f"COPY (SELECT * FROM {table} ORDER BY ALL) TO {_sql_literal(parquet_path)} (FORMAT PARQUET)")
        return [csv_path, parquet_path]


def _sql_literal(path: Path) -> str:
    # COPY targets cannot be bound as parameters.
    return "'" + path.as_posix().replace("'", "''") + "'"
