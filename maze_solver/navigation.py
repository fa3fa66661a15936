"""
navigation.py
-------------
Turn a solved move list into a prompt for a language model that writes
robot-car driving instructions, and optionally send it to Gemini.

The solver never depends on this; it is a string-formatting boundary plus a
thin client call.
"""

from __future__ import annotations

import os
from typing import Optional, Sequence

import google.generativeai as genai

from .config import GEMINI_API_KEY_ENV, GEMINI_MODEL
from .moves import Move, moves_to_json

NAVIGATION_PREAMBLE = (
    "You are a navigation assistant for a small robot car in a maze.\n"
    "The maze has already been solved by a BFS algorithm on a grid.\n"
    "The path is given as a sequence of moves of the form "
    "{\"dir\":\"E\",\"steps\":5} where dir is one of N,E,S,W and "
    "steps is the number of grid cells.\n"
    "Starting from the entrance and following the moves in order, "
    "give clear step-by-step instructions using ONLY these commands:\n"
    "- FORWARD <cells>\n"
    "- TURN LEFT\n"
    "- TURN RIGHT\n"
    "Be concise and numbered (Step 1, Step 2, ...).\n"
    "Here is the path:\n"
)


def build_navigation_prompt(moves: Sequence[Move]) -> str:
    return NAVIGATION_PREAMBLE + moves_to_json(moves)


def request_navigation_instructions(moves: Sequence[Move],
                                    api_key: Optional[str] = None,
                                    model_name: str = GEMINI_MODEL) -> str:
    """Send the navigation prompt to Gemini and return its text reply."""
    if not moves:
        raise ValueError("No moves to explain; solve a maze first.")
    api_key = api_key or os.environ.get(GEMINI_API_KEY_ENV)
    if not api_key:
        raise RuntimeError(f"Set {GEMINI_API_KEY_ENV} environment variable")

    genai.configure(api_key=api_key)
    model = genai.GenerativeModel(model_name)
    resp = model.generate_content(build_navigation_prompt(moves))
    text = (resp.text or "").strip()
    if not text:
        raise RuntimeError("Empty response from Gemini.")
    return text
