# -*- coding: utf-8 -*-
"""Oracle — recovering JSON objects and numbers from model output."""

from __future__ import annotations

import ast
import json
import math
import re
from typing import Any, Dict, Iterable, List, Optional

from ..errors import OracleFailure

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*", flags=re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\s*```$")
_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _strip_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = _FENCE_OPEN_RE.sub("", cleaned)
    return _FENCE_CLOSE_RE.sub("", cleaned)


def _remove_trailing_commas(text: str) -> str:
    """Drop commas right before ``}`` or ``]``, leaving string literals alone."""
    out: list[str] = []
    in_str = False
    escaped = False
    for i, ch in enumerate(text):
        if in_str:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "\"":
                in_str = False
            continue
        if ch == "\"":
            in_str = True
        elif ch == ",":
            rest = text[i + 1 :].lstrip(" \t\r\n")
            if rest[:1] in ("}", "]"):
                continue
        out.append(ch)
    return "".join(out)


def _object_candidates(text: str) -> List[str]:
    """Balanced ``{...}`` spans in ``text``, outermost only, in order."""
    cleaned = _strip_fences(text)
    candidates: List[str] = []
    in_str = False
    escaped = False
    depth = 0
    start: Optional[int] = None
    for i, ch in enumerate(cleaned):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "\"":
                in_str = False
            continue
        if ch == "\"":
            in_str = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0 and start is not None:
                candidates.append(cleaned[start : i + 1])
                start = None
    return candidates


def _sanitize_json_like(text: str) -> str:
    # Full-width punctuation, curly quotes, trailing commas, non-finite floats.
    cleaned = text.replace("：", ":").replace("，", ",")
    cleaned = cleaned.replace("“", "\"").replace("”", "\"").replace("‘", "'").replace("’", "'")
    cleaned = _remove_trailing_commas(cleaned)
    cleaned = re.sub(r"\bNaN\b", "null", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"-?\bInfinity\b", "null", cleaned, flags=re.IGNORECASE)
    return cleaned


def _attempts(candidate: str) -> Iterable[Any]:
    sanitized = _sanitize_json_like(candidate)
    for attempt in (candidate, sanitized):
        try:
            yield json.loads(attempt)
        except ValueError:
            pass
    # Python-literal dicts (single quotes, None/True/False) as a last resort.
    for attempt in (candidate, sanitized):
        py = re.sub(r"\bnull\b", "None", attempt, flags=re.IGNORECASE)
        py = re.sub(r"\btrue\b", "True", py, flags=re.IGNORECASE)
        py = re.sub(r"\bfalse\b", "False", py, flags=re.IGNORECASE)
        try:
            yield ast.literal_eval(py)
        except (ValueError, SyntaxError, MemoryError, RecursionError):
            pass


def parse_json_object(content: str) -> Dict[str, Any]:
    """First JSON object recoverable from ``content``; ``OracleFailure`` otherwise."""
    for candidate in _object_candidates(content or ""):
        for parsed in _attempts(candidate):
            if isinstance(parsed, dict):
                return parsed
    snippet = (content or "").replace("\n", " ").strip()[:200]
    raise OracleFailure(f"Oracle output is not a JSON object: {snippet!r}")


def coerce_number(value: Any) -> Optional[float]:
    """Numbers and numeric strings such as ``"12g"``; ``None`` when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        m = _NUM_RE.search(value.strip().replace(",", ""))
        if not m:
            return None
        number = float(m.group(0))
    else:
        return None
    return number if math.isfinite(number) else None


def first_present(obj: Dict[str, Any], keys: Iterable[str]) -> Any:
    for k in keys:
        if k in obj and obj[k] is not None:
            return obj[k]
    return None


def _concat_text_parts(parts: object) -> str:
    if not isinstance(parts, list):
        return ""
    out: list[str] = []
    for part in parts:
        if isinstance(part, str):
            out.append(part)
            continue
        if not isinstance(part, dict):
            continue
        ptype = part.get("type")
        if ptype and ptype not in {"text", "output_text"}:
            continue
        text = part.get("text")
        if isinstance(text, str):
            out.append(text)
    return "".join(out)


def extract_text(data: object) -> str:
    """Assistant text from an OpenAI-compatible chat completion payload."""
    if not isinstance(data, dict):
        return ""
    out: list[str] = []
    for choice in data.get("choices") or []:
        if not isinstance(choice, dict):
            continue
        message = choice.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                out.append(content)
            else:
                out.append(_concat_text_parts(content))
        text = choice.get("text")
        if isinstance(text, str):
            out.append(text)
    return "".join(out)


def extract_error(data: object) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        message = err.get("message")
        if isinstance(message, str) and message.strip():
            code = err.get("code") or err.get("status")
            return f"{code}: {message.strip()}" if code else message.strip()
    if isinstance(err, str) and err.strip():
        return err.strip()
    return None
