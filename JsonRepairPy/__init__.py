from .JsonRepairTypes import JsonRepairError, JsonRepairErrorKind, JsonRepairOptions, JsonRepairResult
from .JsonRepairHeuristics import PathPatterns
from .JsonRepairPy import JsonRepairReader, repair
from .JsonRepairFormat import JsonProcessResult, format_json, minify_json, process_json

__all__ = [
    "JsonRepairError",
    "JsonRepairErrorKind",
    "JsonRepairOptions",
    "JsonRepairResult",
    "PathPatterns",
    "JsonRepairReader",
    "repair",
    "JsonProcessResult",
    "format_json",
    "minify_json",
    "process_json",
]
