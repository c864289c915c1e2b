"""
Locating and rewriting contract address literals in text files.

Bookkeeping files hold the output of the deploy script, so the address is the
last 42 characters before the trailing newline. Reference sites are found by
fixed delimiters; every lookup fails loudly instead of splicing at a wrong
offset, and a file is only written once its new content is fully built.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from eth_utils import is_hex_address

from .errors import AddressPatternError

LOG = logging.getLogger(__name__)

ADDRESS_LENGTH = 42
RECORD_WINDOW = ADDRESS_LENGTH + 1
QUOTED_VALUE_DELIMITER = '" : "'


def _read(path: Path) -> str:
    # newline="" keeps CRLF files byte-identical outside the patched range
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _require_address(value: str, what: str) -> str:
    if len(value) != ADDRESS_LENGTH or not is_hex_address(value):
        raise AddressPatternError(f"{what} is not a contract address: {value!r}")
    return value


def extract_recorded_address(text: str) -> str:
    # tolerates exactly one trailing character (the newline print adds)
    return text[-RECORD_WINDOW:][:ADDRESS_LENGTH]


def normalize_bookkeeping(path: Path) -> str:
    """Rewrite a bookkeeping file so it holds only its address; return it."""
    path = Path(path)
    content = _read(path)
    try:
        address = _require_address(extract_recorded_address(content), "Recorded address")
    except AddressPatternError as e:
        raise AddressPatternError(e.message, path) from None
    if content != address:
        _write(path, address)
    LOG.info("Recorded address in %s: %s", path, address)
    return address


def replace_call_argument(text: str, marker: str, terminator: str, new_address: str) -> str:
    """Replace what sits between the first `marker` and the next `terminator`."""
    start = text.find(marker)
    if start < 0:
        raise AddressPatternError(f"Marker {marker!r} not found")
    start += len(marker)
    end = text.find(terminator, start)
    if end < 0:
        raise AddressPatternError(f"No {terminator!r} after {marker!r}")
    _require_address(text[start:end], f"Argument of {marker!r}")
    return text[:start] + new_address + text[end:]


def replace_quoted_value(text: str, line_index: int, new_address: str) -> str:
    """Replace the address opening the first quoted value on one line."""
    lines = text.split("\n")
    if line_index >= len(lines):
        raise AddressPatternError(f"Line {line_index} does not exist")
    line = lines[line_index]
    pos = line.find(QUOTED_VALUE_DELIMITER)
    if pos < 0:
        raise AddressPatternError(f"No quoted value on line {line_index}: {line!r}")
    start = pos + len(QUOTED_VALUE_DELIMITER)
    end = start + ADDRESS_LENGTH
    _require_address(line[start:end], f"Value on line {line_index}")
    lines[line_index] = line[:start] + new_address + line[end:]
    return "\n".join(lines)


def patch_file(path: Path, patch: Callable[[str], str]) -> bool:
    """
    Apply `patch` to the file's text and write the result back.
    Nothing is written when `patch` raises or changes nothing.
    Returns True when the file changed.
    """
    path = Path(path)
    original = _read(path)
    try:
        updated = patch(original)
    except AddressPatternError as e:
        raise AddressPatternError(e.message, path) from None
    if updated == original:
        LOG.info("%s already up to date", path)
        return False
    _write(path, updated)
    LOG.info("Patched %s", path)
    return True
