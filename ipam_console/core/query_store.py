"""URL-style query-string store shared by the navigator and the controller."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, NamedTuple, Optional
from urllib.parse import parse_qsl, urlencode

from simple_logger import Slogger

QueryListener = Callable[[Dict[str, str]], Any]


class _Pair(NamedTuple):
    key: str
    value: str
    # text as it appeared in the query string; re-encoded only when rewritten
    raw: str


def _parse(query_string: str) -> List[_Pair]:
    pairs: List[_Pair] = []
    for segment in query_string.lstrip("?").split("&"):
        if not segment:
            continue
        for key, value in parse_qsl(segment, keep_blank_values=True):
            pairs.append(_Pair(key, value, segment))
    return pairs


def _encode(key: str, value: str) -> _Pair:
    return _Pair(key, value, urlencode([(key, value)]))


class QueryStringStore:
    """
    Holds the parameters of the current location.

    `update` is additive: it rewrites the named parameters in place and keeps
    every other parameter (its original text and position) untouched.
    """

    def __init__(self, query_string: str = "") -> None:
        self._pairs: List[_Pair] = _parse(query_string)
        self._listeners: List[QueryListener] = []

    # ---------- read side ----------
    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for key, value, _ in self._pairs:
            if key == name:
                return value
        return default

    def params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for key, value, _ in self._pairs:
            params.setdefault(key, value)
        return params

    def to_string(self) -> str:
        return "&".join(pair.raw for pair in self._pairs)

    # ---------- write side ----------
    def update(self, **params: Any) -> bool:
        """
        Set (or, with None, remove) parameters; returns True when anything
        changed. Listeners only hear about real changes.
        """
        before = list(self._pairs)
        for name, value in params.items():
            if value is None:
                self._pairs = [pair for pair in self._pairs if pair.key != name]
                continue
            value = str(value)
            replaced = False
            updated: List[_Pair] = []
            for pair in self._pairs:
                if pair.key == name:
                    if not replaced:
                        # an unchanged value keeps its original spelling
                        updated.append(pair if pair.value == value else _encode(name, value))
                        replaced = True
                    continue
                updated.append(pair)
            if not replaced:
                updated.append(_encode(name, value))
            self._pairs = updated

        if self._pairs == before:
            return False
        self._publish()
        return True

    # ---------- listeners ----------
    def subscribe(self, callback: QueryListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: QueryListener) -> bool:
        if callback in self._listeners:
            self._listeners.remove(callback)
            return True
        return False

    def _publish(self) -> None:
        snapshot = self.params()
        for callback in list(self._listeners):
            try:
                callback(snapshot)
            except Exception as e:
                # one broken listener must not stop navigation
                Slogger.exception(e, "Error in query-string listener", {"store": "QueryStringStore"})
