from __future__ import annotations

import re
import secrets
from typing import Any

# Same shape as a MongoDB ObjectId: 12 bytes rendered as 24 hex characters.
OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def new_object_id() -> str:
    return secrets.token_hex(12)


def is_object_id(value: Any) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None
