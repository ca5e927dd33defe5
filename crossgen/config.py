"""Loading word lists and generation requests from disk."""

from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Set, Union

from .compat import CompatibilitySettings
from .crossword import CrosswordSettings
from .errors import ConfigError
from .search import GenerationRequest

PathLike = Union[str, Path]


def clean_word(w: str) -> str:
    return re.sub(r"[^A-Za-z]", "", w.strip()).lower()


def sanitize_word_list(words: Iterable[str]) -> List[str]:
    """Cleaned, lower-cased, de-duplicated words in their original order."""
    out: List[str] = []
    seen: Set[str] = set()
    for w_raw in words:
        w = clean_word(w_raw)
        if not w or w in seen:
            continue
        seen.add(w)
        out.append(w)
    return out


def load_words(path: PathLike) -> List[str]:
    """
    Read a word list: one word per line, or a TSV whose first column is the word
    (anything after the first tab, such as a hint, is ignored).
    """
    words: List[str] = []
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f, delimiter="\t")
        try:
            for row in reader:
                if not row or row[0].lstrip().startswith("#"):
                    continue
                words.append(row[0])
        except UnicodeDecodeError as e:
            raise ConfigError(f"{path}: not valid UTF-8: {e}") from e
    return sanitize_word_list(words)


def request_from_dict(data: Mapping[str, Any]) -> GenerationRequest:
    if not isinstance(data, Mapping):
        raise ConfigError("Request must be a JSON object")

    unknown = sorted(set(data) - {"words", "settings"})
    if unknown:
        raise ConfigError(f"Unknown request keys: {', '.join(unknown)}")

    raw_words = data.get("words")
    if not isinstance(raw_words, list) or not all(isinstance(w, str) for w in raw_words):
        raise ConfigError("'words' must be a list of strings")

    settings = data.get("settings", {})
    if not isinstance(settings, Mapping):
        raise ConfigError("'settings' must be an object")
    unknown = sorted(set(settings) - {"word_compatibility_settings", "crossword_settings"})
    if unknown:
        raise ConfigError(f"Unknown settings keys: {', '.join(unknown)}")

    compat_raw = settings.get("word_compatibility_settings", {})
    crossword_raw = settings.get("crossword_settings", {})
    if not isinstance(compat_raw, Mapping) or not isinstance(crossword_raw, Mapping):
        raise ConfigError("Settings sections must be objects")

    return GenerationRequest.of(
        sanitize_word_list(raw_words),
        CompatibilitySettings.from_dict(compat_raw),
        CrosswordSettings.from_dict(crossword_raw),
    )


def request_to_dict(request: GenerationRequest) -> Dict[str, Any]:
    return {
        "words": list(request.sorted_words()),
        "settings": {
            "word_compatibility_settings": request.compatibility.to_dict(),
            "crossword_settings": request.settings.to_dict(),
        },
    }


def load_request(path: PathLike) -> GenerationRequest:
    """A `.json` request file, or a plain/TSV word list with default settings."""
    path = Path(path)
    if path.suffix.lower() != ".json":
        return GenerationRequest.of(load_words(path))

    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: not valid UTF-8: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON: {e}") from e
    try:
        return request_from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e


def save_request(request: GenerationRequest, path: PathLike) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(request_to_dict(request), f, indent=2)
        f.write("\n")
