from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import httpx

from locationcode.core.errors import BootstrapError
from locationcode.data.airports_repo import AIRPORTS_FILE, COUNTRIES_FILE

logger = logging.getLogger(__name__)

OURAIRPORTS_BASE_URL = "https://davidmegginson.github.io/ourairports-data/"

REFERENCE_FILES = (AIRPORTS_FILE, COUNTRIES_FILE)


def missing_files(data_dir: Union[str, Path], files=REFERENCE_FILES) -> List[str]:
    data_dir = Path(data_dir)
    return [name for name in files if not (data_dir / name).exists()]


def download_file(client: httpx.Client, url: str, target: Path) -> int:
    """Stream url into target via a temp file; returns bytes written."""
    tmp = target.with_name(target.name + ".part")
    written = 0
    try:
        with client.stream("GET", url) as r:
            r.raise_for_status()
            with tmp.open("wb") as f:
                for chunk in r.iter_bytes():
                    f.write(chunk)
                    written += len(chunk)
        os.replace(tmp, target)
    finally:
        if tmp.exists():
            tmp.unlink()
    return written


def ensure_reference_data(
    data_dir: Union[str, Path],
    base_url: str = OURAIRPORTS_BASE_URL,
    timeout_seconds: float = 60.0,
    files=REFERENCE_FILES,
    transport: Optional[httpx.BaseTransport] = None,
) -> bool:
    """
    Make sure every reference file exists under data_dir. If any is missing,
    fetch all of them once. Returns True when a download happened.
    Raises BootstrapError naming each file that could not be fetched.
    """
    data_dir = Path(data_dir)
    if not missing_files(data_dir, files):
        return False

    data_dir.mkdir(parents=True, exist_ok=True)
    base = base_url if base_url.endswith("/") else base_url + "/"

    failures: Dict[str, str] = {}
    with httpx.Client(timeout=timeout_seconds, follow_redirects=True, transport=transport) as client:
        for name in files:
            url = base + name
            logger.info(f"Downloading {url}")
            try:
                size = download_file(client, url, data_dir / name)
            except (httpx.HTTPError, OSError) as e:
                logger.error(f"Download of {url} failed: {e}")
                failures[name] = str(e)
                continue
            logger.info(f"Downloaded {name}: {size:,} bytes")

    if failures:
        raise BootstrapError(failures)
    return True
