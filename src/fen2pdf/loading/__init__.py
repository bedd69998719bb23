"""
Module: loading

Purpose:
    Study acquisition: download a Lichess study export and parse it
    into a Study.

Key Functions:
    - fetch_study(): Download study PGN text
    - parse_study(): Parse study text into a Study

Key Classes:
    - FetchError: Download failure
    - ParseError / ErrorKind: Parse failure and its kind

Dependencies:
    - requests: HTTP client
    - fen2pdf.core.models: ChessPosition, Study

Used By:
    - fen2pdf.controller: Pipeline orchestration
"""

from .fetch import fetch_study, study_url, FetchError
from .parser import parse_study, ParseError, ErrorKind

__all__ = [
    "fetch_study",
    "study_url",
    "FetchError",
    "parse_study",
    "ParseError",
    "ErrorKind",
]
