from __future__ import annotations

import re

TABLE_NUMBER_PATTERN = re.compile(r"^T\d+$")


def is_valid_table_number(table_number: str) -> bool:
    return bool(TABLE_NUMBER_PATTERN.match(table_number))
