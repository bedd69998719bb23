"""
Module: loading.fetch

Purpose:
    Download a study export from Lichess. A single blocking GET with
    no retries; any failure aborts the pipeline before parsing.

Key Functions:
    - fetch_study(): Download the PGN text of a study
    - study_url(): Build the export URL for a study id

Key Classes:
    - FetchError: Exception for download failures

Dependencies:
    - requests: HTTP client

Used By:
    - fen2pdf.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

STUDY_URL = "https://lichess.org/study/{study_id}.pgn"
DEFAULT_TIMEOUT_S = 30.0


class FetchError(Exception):
    """Study could not be downloaded."""
    pass


def study_url(study_id: str) -> str:
    """Return the PGN export URL for a study id."""
    study_id = study_id.strip()
    if not study_id:
        raise FetchError("Study id must not be empty")
    return STUDY_URL.format(study_id=study_id)


def fetch_study(
    study_id: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_S,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Download the PGN export of a Lichess study.

    Args:
        study_id: Lichess study identifier
        timeout: Request timeout in seconds
        session: Optional requests session (defaults to module-level get)

    Returns:
        Raw PGN text

    Raises:
        FetchError: On transport errors, non-2xx responses, or a body
            that does not look like a study export

    Example:
        >>> text = fetch_study("abcd1234")
    """
    url = study_url(study_id)
    logger.info(f"Downloading study from {url}")

    getter = session.get if session is not None else requests.get
    try:
        resp = getter(url, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    if not 200 <= resp.status_code < 300:
        raise FetchError(f"Study not found: HTTP {resp.status_code}")

    content = resp.text
    if not content.strip() or ("[Event" not in content and "[StudyName" not in content):
        raise FetchError("Study not found or invalid: no chess positions detected")

    logger.info(f"Downloaded {len(content)} characters")
    return content
