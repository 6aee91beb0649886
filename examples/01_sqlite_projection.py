"""
Example 01: SQLite Projection

This example maps SQLite query results to a dataclass through both source
shapes: a forward-only DataReader and materialized sqlite3.Row rows.
"""

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from row_projector import DataReader, Mapper


@dataclass
class Account:
    """Account read from the accounts table"""
    id: int
    name: str
    balance: Decimal
    opened_at: Optional[datetime]


def main():
    logging.basicConfig(level=logging.DEBUG)

    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE accounts (id INTEGER, name TEXT, balance TEXT, opened_at TEXT)")
    conn.execute("INSERT INTO accounts VALUES (1, 'Alice', '120.50', '2024-03-01T09:30:00')")
    conn.execute("INSERT INTO accounts VALUES (2, 'Bob', NULL, NULL)")
    conn.commit()

    mapper = Mapper(Account)
    mapper.set_initializer(lambda account: print(f"   loaded #{account.id}"))

    print("=== Cursor Projection ===\n")
    with DataReader(conn.execute("SELECT * FROM accounts ORDER BY id")) as reader:
        for account in mapper.iter_reader(reader):
            print(f"   {account}")
    print()

    print("=== Row Projection ===\n")
    conn.row_factory = sqlite3.Row
    rows = conn.execute("SELECT * FROM accounts ORDER BY id").fetchall()
    for account in mapper.map_many(rows):
        print(f"   {account}")

    conn.close()


if __name__ == "__main__":
    main()
