# ABOUTME: SQL DDL for the recordbook books table.
# ABOUTME: One table, caller-supplied integer keys, 255-character text columns.

MAX_TEXT_LENGTH = 255

SCHEMA = f"""
CREATE TABLE IF NOT EXISTS books (
    id     INTEGER PRIMARY KEY,
    title  VARCHAR({MAX_TEXT_LENGTH}) NOT NULL,
    author VARCHAR({MAX_TEXT_LENGTH}) NOT NULL,
    year   INTEGER NOT NULL
);
"""

# signed 64-bit range of an INTEGER column
MIN_INTEGER = -(2**63)
MAX_INTEGER = 2**63 - 1
