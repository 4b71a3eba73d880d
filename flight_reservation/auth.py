"""Username/password check against a flat ``username,password`` file."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .exceptions import PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    username: str
    password: str = ""

    def __repr__(self) -> str:
        return f"User(username={self.username!r})"


def load_users(path: Union[str, Path]) -> List[User]:
    """Read credentials, ignoring lines that do not have exactly two fields."""

    path = Path(path)
    if not path.exists():
        logger.warning("Users file %s not found; nobody can log in", path)
        return []
    try:
        with path.open("r", encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceError(f"cannot read {path}: {exc}") from exc

    users = []
    for line in lines:
        parts = line.split(",")
        if len(parts) != 2:
            continue
        users.append(User(username=parts[0], password=parts[1]))
    return users


def authenticate(users: Iterable[User], username: str, password: str) -> Optional[User]:
    # Exact comparison, first match wins.
    for user in users:
        if user.username == username and user.password == password:
            return user
    return None
