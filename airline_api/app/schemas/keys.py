"""Row keys as accepted from requests.

SQLite stores ``INTEGER`` values as signed 64-bit numbers; binding a
Python int outside that range raises ``OverflowError`` instead of a
``sqlite3.Error``.  Keys coming from a request are checked against the
range before they reach a DAO.
"""

from typing import Optional

ROW_ID_MIN = -(2 ** 63)
ROW_ID_MAX = 2 ** 63 - 1


def parse_row_id(value: Optional[str]) -> Optional[int]:
    """Return ``value`` as a row key, or ``None`` if it is missing, malformed
    or outside the range SQLite can store.
    """
    if value is None:
        return None
    try:
        key = int(str(value).strip())
    except ValueError:
        return None
    if not ROW_ID_MIN <= key <= ROW_ID_MAX:
        return None
    return key
