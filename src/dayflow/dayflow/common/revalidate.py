from __future__ import annotations

import logging
from typing import List, Protocol

from flask import g, has_request_context

logger = logging.getLogger(__name__)


class Revalidator(Protocol):
    def revalidate_path(self, path: str) -> None:
        raise NotImplementedError


class StaleViewRegistry(Revalidator):
    """Collects the views whose cached rendering is stale after a write.

    Inside a request the paths are kept on ``flask.g``, so a response only
    reports the writes made while serving it; the HTTP layer drains them into
    the ``X-Dayflow-Revalidate`` header. Calls made outside a request (scripts,
    direct use of the actions) collect on the registry itself.
    """

    def __init__(self):
        self._detached: List[str] = []

    def _paths(self) -> List[str]:
        if has_request_context():
            return g.setdefault("stale_views", [])
        return self._detached

    def revalidate_path(self, path: str) -> None:
        stale = self._paths()
        if path not in stale:
            stale.append(path)
        logger.debug("view %s marked stale", path)

    def drain(self) -> List[str]:
        stale = self._paths()
        paths = list(stale)
        stale.clear()
        return paths
