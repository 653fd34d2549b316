import json
import re

_CODE_FENCE_RE = re.compile(r"```[\s\S]*?```")
# Greedy: spans from the first "{" to the last "}".
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE)
_BOLD_STAR_RE = re.compile(r"\*\*(.*?)\*\*", re.DOTALL)
_BOLD_UNDERSCORE_RE = re.compile(r"__(.*?)__", re.DOTALL)
_ITALIC_RE = re.compile(r"\*(.*?)\*", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_BACKSLASHES_RE = re.compile(r"\\+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def _extract_json_text(text: str) -> str:
    """Replace ``text`` with the payload of its first ``{...}`` span, if any.

    A JSON string replaces the text, an object's string ``data`` field wins
    next, any other value is pretty-printed. Unparseable spans are kept
    verbatim (everything outside the span is dropped either way).
    """
    match = _JSON_OBJECT_RE.search(text)
    if not match:
        return text

    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return match.group(0)

    if isinstance(parsed, str):
        return parsed
    if isinstance(parsed, dict) and isinstance(parsed.get("data"), str):
        return parsed["data"]
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def clean_ai_content(raw: object) -> str:
    """Turn a generated answer into plain, human-readable text.

    Best effort: strips code fences, unwraps embedded JSON, removes email
    addresses and Markdown emphasis, unescapes ``\\n`` and normalizes blank
    lines. Literal braces outside JSON may be mistaken for a JSON span.

    Args:
        raw: Text returned by the model; anything else yields "".

    Returns:
        str: Cleaned and trimmed text.
    """
    if not raw or not isinstance(raw, str):
        return ""

    text = _CODE_FENCE_RE.sub("", raw)
    text = _extract_json_text(text)
    text = _EMAIL_RE.sub("", text)

    text = _BOLD_STAR_RE.sub(r"\1", text)
    text = _BOLD_UNDERSCORE_RE.sub(r"\1", text)
    text = _ITALIC_RE.sub(r"\1", text)
    text = _INLINE_CODE_RE.sub(r"\1", text)
    text = text.replace("&quot;", '"')

    text = text.replace("\\n", "\n")
    text = _BACKSLASHES_RE.sub("", text)

    text = text.replace("\r\n", "\n")
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()
