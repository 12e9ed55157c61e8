"""Session variable storage"""

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class VariableStore:
    """Mapping from variable name to value, alive for the whole session"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def set(self, name: str, value: str) -> None:
        """Insert or overwrite a variable"""
        logger.debug("set %s=%r", name, value)
        self._values[name] = value

    def get(self, name: str) -> Optional[str]:
        """Return the stored value, or None if the variable was never assigned"""
        return self._values.get(name)

    def lookup(self, name: str) -> str:
        """Value used during substitution: undefined variables expand to ''"""
        return self._values.get(name, '')

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        return f"VariableStore({self._values!r})"
