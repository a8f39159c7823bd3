"""Reading resources from the local filesystem or over HTTP."""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import requests

from .constants import HTTP_CACHE_DIR, REQUEST_TIMEOUT, USER_AGENT
from .errors import HttpStatusError, IoError
from .fs import read_file
from .jsonio import parse_json, strip_bom
from .manifest import parse_manifest
from .paths import is_http

log = logging.getLogger("typings_store")


class HttpCache:
    """On-disk store of successful HTTP response bodies, keyed by URL.

    Entries are best-effort: an unreadable entry counts as a miss and a
    failed save is logged, never raised.
    """

    def __init__(self, root: str | Path = HTTP_CACHE_DIR) -> None:
        self.root = Path(root)

    def key(self, url: str) -> str:
        return hashlib.sha256(url.encode("utf-8")).hexdigest()

    def load(self, url: str) -> str | None:
        key = self.key(url)
        meta_path = self.root / f"{key}.json"
        body_path = self.root / f"{key}.body"
        try:
            meta = json.loads(meta_path.read_text("utf-8"))
            if meta.get("url") != url:
                return None
            return body_path.read_text("utf-8")
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            log.debug("Ignoring unreadable cache entry for %s (%s)", url, exc)
            return None

    def save(self, url: str, body: str) -> None:
        key = self.key(url)
        meta = {"url": url}
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            (self.root / f"{key}.body").write_text(body, "utf-8")
            (self.root / f"{key}.json").write_text(
                json.dumps(meta, indent=2, sort_keys=True) + "\n", "utf-8"
            )
        except OSError as exc:
            log.warning("Could not cache %s (%s)", url, exc)

    def __contains__(self, url: str) -> bool:
        return self.load(url) is not None


class ResourceReader:
    """Read text from a local path or an HTTP(S) URL.

    The cache and session are passed in so one of each can be shared
    across a whole run (and replaced in tests).
    """

    def __init__(
        self,
        cache: HttpCache | None = None,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.cache = cache
        self.session = session or requests.Session()
        self.timeout = timeout

    def read_http(self, url: str) -> str:
        """GET *url*; anything but a 200 raises ``HttpStatusError``."""
        if self.cache is not None:
            cached = self.cache.load(url)
            if cached is not None:
                log.debug("Cache hit for %s", url)
                return cached

        log.info("Fetching %s", url)
        try:
            resp = self.session.get(
                url,
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise IoError(
                f"Request failed: {exc}", context={"url": url}
            ) from exc

        if resp.status_code != 200:
            raise HttpStatusError(url, resp.status_code)

        resp.encoding = "utf-8"
        body = resp.text
        if self.cache is not None:
            self.cache.save(url, body)
        return body

    def read_from(self, location: str) -> str:
        """Read *location* from the network or the filesystem."""
        if is_http(location):
            return self.read_http(location)
        return read_file(location)

    def read_json_from(self, location: str) -> Any:
        return parse_json(strip_bom(self.read_from(location)), location)

    def read_config_from(self, location: str) -> dict:
        """Read a manifest from anywhere (HTTP or local)."""
        return parse_manifest(self.read_json_from(location), location)
