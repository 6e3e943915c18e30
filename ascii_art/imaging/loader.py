#!/usr/bin/env python3
# ascii_art/imaging/loader.py
"""
Image source for the ASCII art engine.

Loads a local file or an http(s) URL and returns the RGB pixel array used by
the grid and brightness modules.
Features:
- Automatic retry using urllib3 Retry for remote images.
- Every failure surfaces as ImageLoadError with the original cause chained.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Optional

import numpy as np
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from PIL import Image, UnidentifiedImageError

from ascii_art.errors import ImageLoadError
from ascii_art.imaging.grid import as_pixels

__all__ = ["ImageLoader", "is_url"]

log = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


class ImageLoader:
    """Reads images from disk or over HTTP with retry."""

    def __init__(
        self,
        user_agent: str = "ascii-art/1.0",
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = (connect_timeout, read_timeout)

        if session is None:
            session = requests.Session()
            retry = Retry(
                total=retries,
                connect=retries,
                read=retries,
                backoff_factor=0.3,
                status_forcelist=(429, 500, 502, 503, 504),
                allowed_methods=False,
            )
            adapter = HTTPAdapter(max_retries=retry)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        session.headers["User-Agent"] = user_agent
        self.session = session

    # -------------
    # Fetch logic
    # -------------

    def _fetch(self, url: str) -> bytes:
        log.info("Fetching image %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            log.warning("Fetching %s failed: %s", url, e)
            raise ImageLoadError(f"Could not fetch image from {url}") from e
        if not r.content:
            raise ImageLoadError(f"Empty response from {url}")
        return r.content

    def _read(self, path: str) -> bytes:
        path = os.path.expanduser(path)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            log.warning("Reading %s failed: %s", path, e)
            raise ImageLoadError(f"Could not read image file {path}") from e

    def load(self, source: str) -> np.ndarray:
        """Return the (H, W, 3) pixel array of a path or URL."""
        if not source:
            raise ImageLoadError("No image source given")
        data = self._fetch(source) if is_url(source) else self._read(source)
        try:
            with Image.open(io.BytesIO(data)) as img:
                return as_pixels(img.convert("RGB"))
        except (UnidentifiedImageError, OSError, ValueError) as e:
            log.warning("Decoding %s failed: %s", source, e)
            raise ImageLoadError(f"Could not decode image {source}") from e
