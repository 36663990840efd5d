"""
Simple in-memory flag store, keyed by project then flag key
"""

import json
from typing import Any, Dict, Optional


class FlagNotFoundError(KeyError):
    """Raised when a project or flag key is absent from the store"""

    def __init__(self, project_key: str, flag_key: str):
        super().__init__(f"{project_key}/{flag_key}")
        self.project_key = project_key
        self.flag_key = flag_key


def flag_key_of(payload: Dict[str, Any]) -> Optional[str]:
    """Path-addressable key for a creation payload.

    Non-string keys are stored under their JSON text, so `{"key": 123}` is
    reachable at `/123` and `{"key": true}` at `/true`. A missing or null
    key yields None.
    """
    key = payload.get("key")
    if key is None or isinstance(key, str):
        return key
    return json.dumps(key)


class FlagStore:
    """Two-level map: project key -> flag key -> flag record.

    Records are the client's creation payload plus the server-managed
    ``_version`` (always 1) and ``archived`` fields. Operations are plain
    synchronous calls, so each one runs to completion on the event loop
    without interleaving with another request's.
    """

    def __init__(self):
        self._projects: Dict[str, Dict[Optional[str], Dict[str, Any]]] = {}

    def put(self, project_key: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or fully replace the flag named by ``payload["key"]``."""
        record = dict(payload)
        record["_version"] = 1
        record["archived"] = False
        self._projects.setdefault(project_key, {})[flag_key_of(payload)] = record
        return record

    def get(self, project_key: str, flag_key: str) -> Dict[str, Any]:
        flags = self._projects.get(project_key)
        if flags is None or flag_key not in flags:
            raise FlagNotFoundError(project_key, flag_key)
        return flags[flag_key]

    def delete(self, project_key: str, flag_key: str) -> None:
        # Empty project namespaces are left in place
        self.get(project_key, flag_key)
        del self._projects[project_key][flag_key]

    def archive(self, project_key: str, flag_key: str) -> Dict[str, Any]:
        record = self.get(project_key, flag_key)
        record["archived"] = True
        return record

    def count(self) -> int:
        """Total number of stored flags across all projects"""
        return sum(len(flags) for flags in self._projects.values())

    def clear(self) -> None:
        self._projects.clear()
