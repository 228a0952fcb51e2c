"""Media directory resolution and image storage."""

import configparser
import logging
import os
import re
import sys
import time
import uuid
from pathlib import Path
from urllib.parse import urlsplit

import httpx

from lexicard.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSION = ".jpg"
COLLECTION_FILE = "collection.anki2"
MEDIA_FOLDER = "collection.media"


def anki_base_path(config: Settings) -> Path:
    """Anki2 data directory for the current OS."""
    if config.anki_base_path:
        return config.anki_base_path
    home = Path.home()
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", home / "AppData" / "Roaming")) / "Anki2"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "Anki2"
    return home / ".local" / "share" / "Anki2"


def _current_profile(base: Path) -> str | None:
    profiles_ini = base / "profiles.ini"
    if not profiles_ini.is_file():
        return None
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(profiles_ini, encoding="utf-8")
    except configparser.Error as e:
        logger.warning(f"Could not parse {profiles_ini}: {e}")
        return None
    for section in parser.sections():
        if parser.get(section, "isCurrent", fallback="").lower() == "true":
            return parser.get(section, "name", fallback=None)
    return None


def _newest_profile(base: Path) -> Path | None:
    collections = [p for p in base.glob(f"*/{COLLECTION_FILE}") if p.is_file()]
    if not collections:
        return None
    return max(collections, key=lambda p: p.stat().st_mtime).parent


def resolve_media_path(config: Settings) -> Path:
    """
    Find the directory images are saved into.

    Order: explicit override, the current profile from profiles.ini, the
    profile whose collection was modified last, then the local fallback.
    The chosen directory is created if missing.
    """
    if config.anki_media_path:
        path = config.anki_media_path
    else:
        path = _detect_anki_media(anki_base_path(config)) or config.fallback_media_dir

    path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Media directory: {path}")
    return path


def _detect_anki_media(base: Path) -> Path | None:
    if not base.is_dir():
        logger.debug(f"No Anki2 directory at {base}")
        return None

    profile = _current_profile(base)
    if profile:
        media = base / profile / MEDIA_FOLDER
        if media.is_dir():
            return media

    newest = _newest_profile(base)
    if newest is not None:
        return newest / MEDIA_FOLDER
    logger.debug(f"No profile with {COLLECTION_FILE} in {base}")
    return None


def _sanitize_filename(filename: str) -> str:
    """
    Sanitize a filename to prevent path traversal attacks.

    Removes path components and potentially dangerous characters,
    keeping only the base filename with safe characters.
    """
    if not filename:
        return f"upload_{uuid.uuid4().hex[:8]}"

    # Get only the base filename (removes any directory components)
    name = Path(filename.replace("\\", "/")).name

    # Remove any null bytes or control characters
    name = re.sub(r"[\x00-\x1f\x7f]", "", name)

    # Replace potentially dangerous characters and spaces
    name = re.sub(r'[<>:"/\\|?*\s]', "_", name)

    name = name.strip(". ")

    if not name:
        return f"upload_{uuid.uuid4().hex[:8]}"

    return name


def _timestamp() -> int:
    return int(time.time() * 1000)


def extension_from_url(url: str) -> str:
    suffix = Path(urlsplit(url).path).suffix.lower()
    if not suffix or not re.fullmatch(r"\.[a-z0-9]{1,5}", suffix):
        return DEFAULT_IMAGE_EXTENSION
    return suffix


class MediaStore:
    """Writes images into the media directory under collision-free names."""

    def __init__(
        self,
        directory: Path,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.directory = directory
        self.timeout = timeout
        self._transport = transport

    def save_upload(self, filename: str, content: bytes) -> str:
        """Store uploaded bytes; returns the stored file name."""
        name = f"{_timestamp()}_{_sanitize_filename(filename)}"
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / name).write_bytes(content)
        logger.info(f"Saved upload as {name}")
        return name

    async def save_from_url(self, url: str) -> str:
        """Download ``url`` into the media directory; returns the stored file name."""
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            raise ValueError(f"Unsupported image URL: {url}")

        name = f"{_timestamp()}{extension_from_url(url)}"
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / name

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, follow_redirects=True
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    with target.open("wb") as fh:
                        async for chunk in response.aiter_bytes():
                            fh.write(chunk)
        except httpx.HTTPError:
            target.unlink(missing_ok=True)
            raise

        logger.info(f"Downloaded {url} as {name}")
        return name
