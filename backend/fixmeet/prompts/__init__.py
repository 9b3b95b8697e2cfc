from __future__ import annotations

from functools import lru_cache
from pathlib import Path

PROMPTS_DIR = Path(__file__).resolve().parent
PROMPT_EXTENSION = ".txt"


@lru_cache(maxsize=None)
def load_prompt(name: str) -> str:
    """
    Read a system prompt shipped next to this module.

    ``name`` may be given with or without the ``.txt`` suffix.
    """
    if not name:
        raise ValueError("Prompt name must be a non-empty string.")

    filename = name if name.endswith(PROMPT_EXTENSION) else f"{name}{PROMPT_EXTENSION}"
    prompt_path = PROMPTS_DIR / filename
    if not prompt_path.is_file():
        raise FileNotFoundError(f"System prompt '{name}' not found at {prompt_path}.")

    return prompt_path.read_text(encoding="utf-8").strip()


__all__ = ["PROMPTS_DIR", "load_prompt"]
