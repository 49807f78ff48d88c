"""
Validate, repair and re-serialize JSON the way an editor's format and
minify commands do.

Strict-valid input is never touched by the repair engine; everything else is
repaired once and must then pass strict validation.
"""

import json
import logging

from .JsonRepairPy import loads_strict, repair
from .JsonRepairTypes import JsonRepairOptions

logger = logging.getLogger(__name__)

# Stripped from every string and key when trimming.
TRIM_CHARS = " \n\t\r\f\b"

class JsonProcessResult:
    # Whether data holds the formatted JSON.
    success: bool
    # The formatted JSON text.
    data: str
    # Why processing failed, empty on success.
    error: str
    # Whether the input had to be repaired.
    repaired: bool

    def __init__(self, success: bool, data: str = "", error: str = "", repaired: bool = False):
        self.success = success
        self.data = data
        self.error = error
        self.repaired = repaired

    def __repr__(self) -> str:
        if self.success:
            return f"JsonProcessResult(success, repaired={self.repaired}, data={self.data!r})"
        return f"JsonProcessResult(failure, repaired={self.repaired}, error={self.error!r})"

def trim_strings(value):
    if isinstance(value, str):
        return value.strip(TRIM_CHARS)
    if isinstance(value, list):
        return [trim_strings(item) for item in value]
    if isinstance(value, dict):
        return {key.strip(TRIM_CHARS): trim_strings(item) for key, item in value.items()}
    return value

def _dumps(value, indent: str, sort_keys: bool) -> str:
    if indent == "0":
        return json.dumps(value, separators=(",", ":"), sort_keys=sort_keys, ensure_ascii=False)
    if indent == "tab":
        spacing = "\t"
    elif indent == "2":
        spacing = 2
    else:
        spacing = 4
    return json.dumps(value, indent=spacing, sort_keys=sort_keys, ensure_ascii=False)

def process_json(
    text: str,
    indent: str = "4",
    trim_whitespace: bool = False,
    keep_order: bool = True,
) -> JsonProcessResult:
    """
    Validates text, repairing it when it is not strict JSON, and serializes
    the resulting value.

    `indent` is "tab", "2", "4" or "0" (compact). `keep_order=False` sorts
    object keys. `trim_whitespace` is passed to the repair engine and also
    strips whitespace from every string and key of the parsed value.
    """
    if text.strip() == "":
        return JsonProcessResult(True)

    repaired = False
    try:
        value = loads_strict(text)
    except ValueError:
        result = repair(text, options=JsonRepairOptions(trim_whitespace=trim_whitespace))
        if not result:
            return JsonProcessResult(False, error=f"Unable to parse JSON: {result.error()}")
        repaired = True
        logger.info("Input was not valid JSON and has been repaired")
        try:
            value = loads_strict(result.value())
        except ValueError as e:
            logger.warning("Repaired JSON is still invalid: %s", e)
            return JsonProcessResult(False, error="Repaired JSON is still invalid", repaired=True)

    if trim_whitespace:
        value = trim_strings(value)
    return JsonProcessResult(True, data=_dumps(value, indent, not keep_order), repaired=repaired)

def format_json(
    text: str,
    indent: str = "4",
    trim_whitespace: bool = False,
    keep_order: bool = True,
) -> JsonProcessResult:
    return process_json(text, indent=indent, trim_whitespace=trim_whitespace, keep_order=keep_order)

def minify_json(text: str, trim_whitespace: bool = False, keep_order: bool = True) -> JsonProcessResult:
    return process_json(text, indent="0", trim_whitespace=trim_whitespace, keep_order=keep_order)
