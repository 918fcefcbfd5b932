"""Human-readable identifier generation per entity kind."""

import re
import threading
from enum import Enum

from agropecuario.infra.logging import get_logger

logger = get_logger(__name__)


class EntityKind(str, Enum):
    """Entity kinds that receive generated identifiers."""

    PRODUCT = "product"
    HARVEST = "harvest"


DEFAULT_PREFIXES: dict[EntityKind, str] = {
    EntityKind.PRODUCT: "AGR",
    EntityKind.HARVEST: "COS",
}


class IdGenerator:
    """Thread-safe sequential id generator.

    Keeps one counter per entity kind and formats values as
    ``<prefix><zero-padded counter>`` (``AGR001``, ``COS042``). The padding
    is a minimum width: ``AGR1000`` follows ``AGR999``. Counters only move
    forward, so an id is never handed out twice, even after deletion.
    """

    def __init__(
        self,
        prefixes: dict[EntityKind, str] | None = None,
        width: int = 3,
    ) -> None:
        self._prefixes = dict(prefixes or DEFAULT_PREFIXES)
        self._width = width
        self._counters: dict[EntityKind, int] = {kind: 0 for kind in self._prefixes}
        self._patterns = {
            kind: re.compile(rf"^{re.escape(prefix)}(\d+)$")
            for kind, prefix in self._prefixes.items()
        }
        self._lock = threading.Lock()

    def next(self, kind: EntityKind) -> str:
        """Issue the next identifier for ``kind``.

        Raises:
            KeyError: If ``kind`` has no configured prefix
        """
        with self._lock:
            self._counters[kind] += 1
            value = self._counters[kind]
        return self.format(kind, value)

    def observe(self, kind: EntityKind, identifier: str) -> None:
        """Advance the counter past a caller-supplied identifier.

        Identifiers that do not follow the kind's pattern are ignored; they
        can never collide with generated ones.
        """
        match = self._patterns[kind].match(identifier)
        if not match:
            return

        value = int(match.group(1))
        with self._lock:
            if value > self._counters[kind]:
                self._counters[kind] = value
                logger.debug("Id counter advanced", kind=kind.value, counter=value)

    def current(self, kind: EntityKind) -> int:
        """Last counter value issued or observed for ``kind``."""
        with self._lock:
            return self._counters[kind]

    def format(self, kind: EntityKind, value: int) -> str:
        return f"{self._prefixes[kind]}{value:0{self._width}d}"
