"""Configuration constants and logging setup."""

import logging
import os
from pathlib import Path

VERSION = "0.1.0"
PROJECT_NAME = "typings"
CONFIG_FILE = "typings.json"
TYPINGS_DIR = "typings"
DTS_MAIN_FILE = "main.d.ts"
DTS_BROWSER_FILE = "browser.d.ts"

# Artifact directories, relative to the project root.
MAIN_TYPINGS_DIR = Path(TYPINGS_DIR, "definitions", "main")
BROWSER_TYPINGS_DIR = Path(TYPINGS_DIR, "definitions", "browser")
AMBIENT_MAIN_TYPINGS_DIR = Path(TYPINGS_DIR, "ambient", "main")
AMBIENT_BROWSER_TYPINGS_DIR = Path(TYPINGS_DIR, "ambient", "browser")

CACHE_DIR = Path(
    os.environ.get("TYPINGS_CACHE_DIR")
    or Path.home() / ".typings" / "cache"
)
HTTP_CACHE_DIR = CACHE_DIR / "http"

REQUEST_TIMEOUT = 30  # seconds
USER_AGENT = f"typings-store/{VERSION}"
LOCK_TIMEOUT = -1  # block until acquired

DEPENDENCY_KEYS = ("dependencies", "devDependencies", "ambientDependencies")
DEFAULT_CONFIG = {"dependencies": {}}

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("typings_store")
