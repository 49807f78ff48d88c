import json
import logging
import re

from .JsonRepairBuffer import JsonRepairBuffer
from .JsonRepairChars import (
    ESCAPE_CHARS,
    escape_control_character,
    is_control_character,
    is_delimiter,
    is_digit,
    is_double_quote,
    is_double_quote_like,
    is_function_name_char,
    is_function_name_start,
    is_hex,
    is_letter,
    is_newline,
    is_quote,
    is_single_quote,
    is_single_quote_like,
    is_special_whitespace,
    is_start_of_value,
    is_surrogate,
    is_unquoted_string_delimiter,
    is_whitespace,
)
from .JsonRepairHeuristics import DEFAULT_PATH_PATTERNS, analyze_potential_file_path
from .JsonRepairTypes import JsonRepairError, JsonRepairErrorKind, JsonRepairOptions, JsonRepairResult

logger = logging.getLogger(__name__)

# A complete JSON number; quoted strings matching it are emitted bare.
_JSON_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_LEADING_ZERO_RE = re.compile(r"-?0[0-9]")
# One unit of escaped string content: a \uXXXX escape, a two character escape or a plain character.
_ESCAPE_UNIT_RE = re.compile(r"\\u[0-9a-fA-F]{4}|\\.|.", re.DOTALL)
# Escape units removed when trimming string content.
_TRIMMABLE_UNITS = frozenset([" ", "\\n", "\\t", "\\r", "\\f", "\\b"])

_QUOTE_OR_NEWLINE_RES = {
    is_double_quote: re.compile("[\"\r\n]"),
    is_single_quote: re.compile("['\r\n]"),
    is_double_quote_like: re.compile("[\"\u201c\u201d\r\n]"),
    is_single_quote_like: re.compile("['\u2018\u2019`\u00b4\r\n]"),
}

def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant {name}")

def loads_strict(text: str):
    """
    Parses text as strict JSON. NaN and Infinity are rejected.
    """
    return json.loads(text, parse_constant=_reject_constant)

def _trim_escaped(content: str, leading: bool) -> str:
    """
    Strips whitespace escape units from the end (and optionally the start)
    of escaped string content without splitting an escape pair.
    """
    units = _ESCAPE_UNIT_RE.findall(content)
    end = len(units)
    while end > 0 and units[end - 1] in _TRIMMABLE_UNITS:
        end -= 1
    begin = 0
    if leading:
        while begin < end and units[begin] in _TRIMMABLE_UNITS:
            begin += 1
    return "".join(units[begin:end])

def _escape_bare(symbol: str) -> str:
    buf: list[str] = []
    for c in symbol:
        if is_double_quote_like(c):
            buf.append('\\"')
        elif c == "\\":
            buf.append("\\\\")
        elif is_control_character(c):
            buf.append(escape_control_character(c))
        else:
            buf.append(c)
    return "".join(buf)

class JsonRepairReader:
    # Constructor names from MongoDB shell output.
    EXTENDED_CONSTRUCTORS = frozenset(["ObjectId", "NumberLong", "NumberInt", "ISODate", "BinData"])
    KEYWORDS = (
        ("true", "true"), ("false", "false"), ("null", "null"),
        ("True", "true"), ("False", "false"), ("None", "null"),
    )
    URL_SCHEMES = frozenset(["http", "https", "ftp"])
    # Longest first so a bracket hugging the fence is consumed with it.
    OPENING_FENCES = ("[```", "{```", "```")
    CLOSING_FENCES = ("```]", "```}", "```")
    REGEX_FLAGS = frozenset("dgimsuvy")

    def __init__(self, source: str, options: JsonRepairOptions | None = None):
        self.source = source
        self.options = options if options is not None else JsonRepairOptions()
        self.path_patterns = self.options.path_patterns or DEFAULT_PATH_PATTERNS
        self.i = 0
        self.n = len(source)
        self.depth = 0
        self._scan_cache: dict[object, tuple[int, int]] = {}

    @staticmethod
    def repair_from_string(text: str, options: JsonRepairOptions | None = None) -> str:
        return JsonRepairReader(text, options).repair()

    def repair(self) -> str:
        """
        Repairs the whole source and returns the JSON text.

        Raises JsonRepairError when no value can be recovered.
        """
        if self.n == 0:
            raise self._err("Unexpected end of json string", JsonRepairErrorKind.UNEXPECTED_END, 0)
        for position, c in enumerate(self.source):
            if is_surrogate(c):
                raise self._err("Invalid unicode character", JsonRepairErrorKind.INVALID_UNICODE, position)
        if not self.options.trim_whitespace and not self.options.newline_delimited and self._is_strict_json():
            logger.debug("Input is already valid JSON")
            return self.source.strip()
        logger.debug("Repairing %d characters", self.n)

        out = JsonRepairBuffer()
        self._parse_markdown_code_block(out, self.OPENING_FENCES)
        if self.options.newline_delimited:
            processed = self._parse_newline_delimited(out)
        else:
            processed = self._parse_value(out)
        if not processed:
            raise self._no_value_error()
        self._parse_markdown_code_block(out, self.CLOSING_FENCES)
        if self.i < self.n:
            logger.debug("Ignoring %d trailing characters at %d", self.n - self.i, self.i)
        return out.getvalue().strip()

    def _is_strict_json(self) -> bool:
        try:
            loads_strict(self.source)
        except (ValueError, RecursionError):
            return False
        return True

    def _eof(self) -> bool:
        return self.i >= self.n

    def _peek(self, k: int = 0) -> str:
        j = self.i + k
        return self.source[j] if j < self.n else ""

    def _char_at(self, j: int) -> str:
        return self.source[j] if 0 <= j < self.n else ""

    def _err(self, msg: str, kind: JsonRepairErrorKind, position: int | None = None) -> JsonRepairError:
        return JsonRepairError(msg, self.i if position is None else position, kind)

    def _no_value_error(self) -> JsonRepairError:
        if self._eof():
            return self._err("Unexpected end of json string", JsonRepairErrorKind.UNEXPECTED_END, self.n)
        c = self._peek()
        if is_control_character(c):
            return self._err(f"Invalid character {c!r}", JsonRepairErrorKind.INVALID_CHARACTER)
        return self._err(f"Unexpected character {c!r}", JsonRepairErrorKind.UNEXPECTED_CHARACTER)

    def _parse_char(self, out: JsonRepairBuffer, c: str) -> bool:
        if self._peek() == c:
            out.write(c)
            self.i += 1
            return True
        return False

    def _skip_char(self, c: str) -> bool:
        if self._peek() == c:
            self.i += 1
            return True
        return False

    def _find_next(self, predicate, start: int) -> int:
        # Index of the first quote of the predicate's kind or newline at or after start.
        cached = self._scan_cache.get(predicate)
        if cached is not None and cached[0] <= start <= cached[1]:
            return cached[1]
        match = _QUOTE_OR_NEWLINE_RES[predicate].search(self.source, start)
        found = match.start() if match else self.n
        self._scan_cache[predicate] = (start, found)
        return found

    def _is_url_scheme_before(self, colon: int, floor: int = 0) -> bool:
        if colon <= floor or self._char_at(colon) != ":":
            return False
        k = colon - 1
        while k >= floor and is_letter(self.source[k]):
            k -= 1
        return self.source[k + 1:colon] in self.URL_SCHEMES

    def _at_url_separator(self) -> bool:
        return self._peek() == ":" and self.source.startswith("//", self.i + 1)

    def _scan_whitespace(self, j: int, out: JsonRepairBuffer | None = None) -> int:
        start = j
        while j < self.n and is_whitespace(self.source[j]):
            j += 1
        if out is not None and j > start:
            out.write("".join(" " if is_special_whitespace(c) else c for c in self.source[start:j]))
        return j

    def _scan_comment(self, j: int) -> int:
        s = self.source
        if j + 1 >= self.n or s[j] != "/":
            return j
        if s[j + 1] == "*":
            end = s.find("*/", j + 1)
            return self.n if end == -1 else end + 2
        if s[j + 1] == "/":
            # http://, https:// and ftp:// are not comments
            if self._is_url_scheme_before(j - 1):
                return j
            end = j + 2
            while end < self.n and not is_newline(s[end]):
                end += 1
            return end
        return j

    def _scan_whitespace_and_comments(self, j: int, out: JsonRepairBuffer | None = None) -> int:
        j = self._scan_whitespace(j, out)
        while True:
            k = self._scan_comment(j)
            if k == j:
                return j
            j = self._scan_whitespace(k, out)

    def _parse_whitespace_and_comments(self, out: JsonRepairBuffer | None) -> bool:
        start = self.i
        self.i = self._scan_whitespace_and_comments(self.i, out)
        return self.i > start

    def _skip_ellipsis(self, out: JsonRepairBuffer) -> bool:
        self._parse_whitespace_and_comments(out)
        if not self.source.startswith("...", self.i):
            return False
        self.i += 3
        self._parse_whitespace_and_comments(out)
        self._skip_char(",")
        return True

    def _parse_value(self, out: JsonRepairBuffer) -> bool:
        self.depth += 1
        try:
            if self.depth > self.options.max_depth:
                raise self._err(
                    f"Maximum nesting depth of {self.options.max_depth} exceeded",
                    JsonRepairErrorKind.NESTING_TOO_DEEP,
                )
            self._parse_whitespace_and_comments(out)
            start, mark = self.i, len(out)
            if self._parse_object(out) or self._parse_extended_constructor(out):
                self._parse_whitespace_and_comments(out)
                return True
            self.i = start
            out.truncate(mark)
            processed = (
                self._parse_array(out)
                or self._parse_string(out, coerce_numeric=True)
                or self._parse_number(out)
                or self._parse_keyword(out)
                or self._parse_unquoted_string(out)
                or self._parse_regex(out)
            )
            self._parse_whitespace_and_comments(out)
            return processed
        finally:
            self.depth -= 1

    def _parse_object(self, out: JsonRepairBuffer) -> bool:
        start, mark = self.i, len(out)
        if self._peek() == "{":
            out.write("{")
            self.i += 1
        elif self._at_braceless_key():
            out.write("{")
        else:
            return False
        self._parse_whitespace_and_comments(out)
        if self._skip_char(","):
            self._parse_whitespace_and_comments(out)

        initial = True
        while True:
            self._parse_whitespace_and_comments(out)
            if self._eof() or self._peek() == "}":
                break
            if initial:
                initial = False
            elif self._parse_char(out, ","):
                self._parse_whitespace_and_comments(out)
                while self._skip_char(","):
                    self._parse_whitespace_and_comments(out)
                if out.endswith(","):
                    # `,"b"` keeps its comma right after the previous value
                    out.truncate(len(out) - 1)
                    out.insert_before_last_whitespace(",")
            else:
                out.insert_before_last_whitespace(",")
            self._skip_ellipsis(out)

            key = JsonRepairBuffer()
            if not self._parse_key(key):
                out.remove_trailing_comma()
                j = self._scan_whitespace_and_comments(self.i)
                if self._char_at(j) == "}":
                    self.i = j
                    break
                if self._eof() or self._peek() in ("{", "[", "]"):
                    break
                raise self._err("Object key expected", JsonRepairErrorKind.OBJECT_KEY_EXPECTED)
            key_text = key.getvalue()
            if key_text[1:-1] in self.URL_SCHEMES and self._at_url_separator():
                # a bare URL, not a key
                self.i = start
                out.truncate(mark)
                return False
            out.write(key_text)

            self._parse_whitespace_and_comments(out)
            if self._parse_char(out, ":"):
                self._parse_whitespace_and_comments(out)
                while self._skip_char(":"):
                    self._parse_whitespace_and_comments(out)
            else:
                c = self._peek()
                if c == "=":
                    self.i += 1
                    out.insert_before_last_whitespace(":")
                elif self._eof() or is_quote(c) or is_letter(c) or is_digit(c) or c in ("{", "[", "-"):
                    out.insert_before_last_whitespace(":")
                else:
                    raise self._err("Colon expected", JsonRepairErrorKind.COLON_EXPECTED)
            self._parse_whitespace_and_comments(out)
            if not self._parse_value(out):
                out.write("null")

        if self._peek() == "}":
            out.write("}")
            self.i += 1
        else:
            out.insert_before_last_whitespace("}")
        return True

    def _parse_key(self, out: JsonRepairBuffer) -> bool:
        return self._parse_string(out, coerce_numeric=False) or self._parse_unquoted_string(out, is_key=True)

    def _at_braceless_key(self) -> bool:
        """
        Whether the cursor sits on `key:` or `key=` without an opening brace.
        """
        save = self.i
        probe = JsonRepairBuffer()
        try:
            self._parse_whitespace_and_comments(probe)
            is_string = self._parse_string(probe, coerce_numeric=False)
            if not is_string and not self._parse_unquoted_string(probe, is_key=True):
                return False
            key = probe.getvalue().strip().strip('"')
            if not is_string and (key == "" or key[0] == "<" or key.count(" ") > 1):
                return False
            if key in self.URL_SCHEMES and self._at_url_separator():
                return False
            self._parse_whitespace_and_comments(None)
            return self._peek() in (":", "=")
        finally:
            self.i = save

    def _parse_array(self, out: JsonRepairBuffer) -> bool:
        if self._peek() != "[":
            return False
        out.write("[")
        self.i += 1
        self._parse_whitespace_and_comments(out)

        initial = True
        while not self._eof() and self._peek() != "]":
            if initial:
                initial = False
                if self._skip_char(","):
                    out.write("null,")
            else:
                self._parse_whitespace_and_comments(out)
                if self._parse_char(out, ","):
                    self._skip_extra_array_commas(out)
                else:
                    out.insert_before_last_whitespace(",")
            self._parse_whitespace_and_comments(out)
            self._skip_ellipsis(out)
            if self._at_enclosing_object_member() or not self._parse_value(out):
                out.remove_trailing_comma()
                break

        if self._peek() == "]":
            out.write("]")
            self.i += 1
        else:
            out.insert_before_last_whitespace("]")
        return True

    def _skip_extra_array_commas(self, out: JsonRepairBuffer) -> None:
        while True:
            start, mark = self.i, len(out)
            self._parse_whitespace_and_comments(out)
            if self._peek() != ",":
                self.i = start
                out.truncate(mark)
                return
            self.i += 1
            if self._char_at(self._scan_whitespace_and_comments(self.i)) != "]":
                # an empty slot between two commas
                out.write("null,")

    def _at_enclosing_object_member(self) -> bool:
        """
        Whether the next token belongs to an object around this array, i.e.
        the array's closing bracket is missing.
        """
        j = self._scan_whitespace_and_comments(self.i)
        if j >= self.n:
            return False
        save = self.i
        self.i = j
        probe = JsonRepairBuffer()
        try:
            if self._parse_string(probe, coerce_numeric=False) or self._parse_unquoted_string(probe, is_key=True):
                return self._char_at(self._scan_whitespace_and_comments(self.i)) in (":", "=")
            return self.source[j] == "}"
        finally:
            self.i = save

    def _parse_string(self, out: JsonRepairBuffer, coerce_numeric: bool = False, concatenate: bool = True) -> bool:
        if not is_quote(self._peek()):
            return False
        s = self.source
        is_end_quote = self._select_end_quote(self.i)
        is_file_path = analyze_potential_file_path(s, self.i, self.path_patterns)
        self.i += 1

        buf: list[str] = []
        while self.i < self.n:
            c = s[self.i]
            if is_quote(c):
                if self._is_string_end(is_end_quote):
                    self.i += 1
                    if concatenate:
                        self._parse_concatenated_strings(buf)
                    content = "".join(buf)
                    if self.options.trim_whitespace:
                        content = _trim_escaped(content, leading=True)
                    if coerce_numeric and _JSON_NUMBER_RE.fullmatch(content):
                        out.write(content)
                    else:
                        out.write('"' + content + '"')
                    return True
                buf.append('\\"' if c == '"' else c)
                self.i += 1
            elif c == "\\":
                self._parse_escape(buf, is_file_path)
            elif not is_file_path and c in (",", "}", "]") and not self._delimiter_inside_string(c, is_end_quote):
                break
            else:
                buf.append(escape_control_character(c) if is_control_character(c) else c)
                self.i += 1

        # unterminated: close before the delimiter or the end of input
        content = _trim_escaped("".join(buf), leading=self.options.trim_whitespace)
        out.write('"' + content + '"')
        return True

    def _select_end_quote(self, start: int):
        """
        Picks the quote kind that ends the string opened at start.

        The opening quote decides by default, but when some kind of quote on
        the same line is followed by a colon, the earliest such quote wins:
        it is most likely the end of a key.
        """
        s = self.source
        opener = s[start]
        if is_single_quote(opener):
            is_end_quote = is_single_quote
        elif is_double_quote(opener):
            is_end_quote = is_double_quote
        elif is_double_quote_like(opener):
            is_end_quote = is_double_quote_like
        else:
            is_end_quote = is_single_quote_like

        best = -1
        for candidate in (is_double_quote, is_single_quote, is_double_quote_like, is_single_quote_like):
            k = self._find_next(candidate, start + 1)
            if k >= self.n or is_newline(s[k]):
                continue
            j = self._scan_whitespace(k + 1)
            if self._char_at(j) in (":", "=") and (best == -1 or k < best):
                best = k
                is_end_quote = candidate
        return is_end_quote

    def _is_string_end(self, is_end_quote) -> bool:
        j = self._scan_whitespace_and_comments(self.i + 1)
        if j < self.n:
            c = self.source[j]
            if not (c in (",", "}", "]", ":", "=", "+", ")") or is_quote(c) or is_letter(c) or is_digit(c)):
                return False
        if is_end_quote(self.source[self.i]):
            return True
        # a quote of another kind only ends the string if the proper one never comes
        return not self._end_quote_later_on_line(self.i + 1, is_end_quote)

    def _end_quote_later_on_line(self, k: int, is_end_quote) -> bool:
        s = self.source
        while k < self.n and not is_newline(s[k]):
            if is_end_quote(s[k]):
                return True
            k += 1
        return False

    def _delimiter_inside_string(self, c: str, is_end_quote) -> bool:
        """
        Whether a `,` `}` or `]` met inside a string is part of its content
        rather than a sign that the closing quote is missing.
        """
        s = self.source
        if c != ",":
            return self._end_quote_later_on_line(self.i + 1, is_end_quote)
        j = self._scan_whitespace(self.i + 1)
        if j >= self.n:
            return False
        nc = s[j]
        if is_quote(nc):
            # `, "key":` after the comma means the string ended before it
            k = j + 1
            while k < self.n and not is_newline(s[k]):
                if is_quote(s[k]):
                    return self._char_at(self._scan_whitespace(k + 1)) not in (":", "=")
                k += 1
            return True
        if is_start_of_value(nc):
            return self._end_quote_later_on_line(self.i + 1, is_end_quote)
        k = j
        while k < self.n and not is_newline(s[k]):
            if s[k] in (":", "="):
                return False
            if is_delimiter(s[k]):
                break
            k += 1
        return True

    def _parse_escape(self, buf: list[str], is_file_path: bool) -> None:
        s = self.source
        if is_file_path:
            # path separators are literal; an already doubled one stays a single pair
            buf.append("\\\\")
            self.i += 2 if self._peek(1) == "\\" else 1
            return
        self.i += 1
        if self._eof():
            buf.append("\\\\")
            return
        e = s[self.i]
        if e == "'":
            buf.append("'")
            self.i += 1
        elif e not in ESCAPE_CHARS:
            # keep the backslash as a literal; the next character is read normally
            buf.append("\\\\")
        elif e != "u":
            buf.append("\\" + e)
            self.i += 1
        else:
            hex_start = self.i + 1
            k = hex_start
            while k < self.n and k - hex_start < 4 and is_hex(s[k]):
                k += 1
            digits = s[hex_start:k]
            buf.append(("\\u" if len(digits) == 4 else "\\\\u") + digits)
            self.i = k

    def _parse_concatenated_strings(self, buf: list[str]) -> None:
        # "a" + "b" becomes "ab"
        while True:
            j = self._scan_whitespace_and_comments(self.i)
            if self._char_at(j) != "+":
                return
            self.i = self._scan_whitespace_and_comments(j + 1)
            segment = JsonRepairBuffer()
            if not self._parse_string(segment, coerce_numeric=False, concatenate=False):
                return
            buf.append(segment.getvalue()[1:-1])

    def _parse_extended_constructor(self, out: JsonRepairBuffer) -> bool:
        s = self.source
        if not is_function_name_start(self._peek()):
            return False
        j = self.i
        while j < self.n and is_function_name_char(s[j]):
            j += 1
        name = s[self.i:j]
        if name not in self.EXTENDED_CONSTRUCTORS:
            return False
        k = self._scan_whitespace(j)
        if self._char_at(k) == "(":
            return self._parse_constructor_call(out, name, k)
        self.i = k
        argument = JsonRepairBuffer()
        if not self._parse_unquoted_string(argument):
            return False
        self._write_constructor(out, name, argument.getvalue())
        return True

    def _parse_constructor_call(self, out: JsonRepairBuffer, name: str, paren: int) -> bool:
        s = self.source
        k = self._scan_whitespace(paren + 1)
        c = self._char_at(k)
        if c == "" or is_quote(c) or c in ("{", "[", ")"):
            # unwrapped like any other function call
            return False
        end = k
        while end < self.n and s[end] != ")" and not is_newline(s[end]):
            end += 1
        argument = s[k:end].rstrip()
        self.i = end
        if self._skip_char(")"):
            self._skip_char(";")
        self._write_constructor(out, name, '"' + _escape_bare(argument) + '"')
        return True

    @staticmethod
    def _write_constructor(out: JsonRepairBuffer, name: str, argument: str) -> None:
        out.write(f'"{name}"')
        if argument.startswith('"') and argument.endswith('"') and len(argument) >= 2:
            out.write("(" + argument + ")")
        else:
            out.write('("' + argument + '")')

    def _parse_number(self, out: JsonRepairBuffer) -> bool:
        s = self.source
        start = self.i
        if self._peek() in ("-", "+"):
            self.i += 1
            if self._at_end_of_number():
                self._write_number(out, s[start:self.i] + "0")
                return True
        digits_start = self.i
        while is_digit(self._peek()):
            self.i += 1
        prefix = s[start:self.i]
        if self.i == digits_start:
            # .5 is read as 0.5
            if self._peek() != "." or not is_digit(self._peek(1)):
                self.i = start
                return False
            prefix += "0"

        if self._peek() == ".":
            self.i += 1
            if self._at_end_of_number():
                self._write_number(out, prefix + ".0")
                return True
            if not is_digit(self._peek()):
                self.i = start
                return False
            fraction_start = self.i
            while is_digit(self._peek()):
                self.i += 1
            prefix += "." + s[fraction_start:self.i]

        if self._peek() in ("e", "E"):
            marker = self._peek()
            self.i += 1
            sign = ""
            while self._peek() in ("-", "+"):
                if self._peek() == "-":
                    sign = "-"
                elif not sign:
                    sign = "+"
                self.i += 1
            if self._at_end_of_number():
                self._write_number(out, prefix + marker + sign + "0")
                return True
            if not is_digit(self._peek()):
                self._write_number(out, prefix + "e+0")
                return True
            exponent_start = self.i
            while is_digit(self._peek()):
                self.i += 1
            self._write_number(out, prefix + marker + sign + s[exponent_start:self.i])
            return True

        if not self._at_end_of_number():
            self.i = start
            return False
        self._write_number(out, prefix)
        return True

    def _at_end_of_number(self) -> bool:
        c = self._peek()
        return c == "" or is_delimiter(c) or is_whitespace(c)

    @staticmethod
    def _write_number(out: JsonRepairBuffer, number: str) -> None:
        if number.startswith("+"):
            number = number[1:]
        if _LEADING_ZERO_RE.match(number):
            # 007 is not a JSON number; keep the digits as a string
            out.write('"' + number + '"')
        else:
            out.write(number)

    def _parse_keyword(self, out: JsonRepairBuffer) -> bool:
        for name, value in self.KEYWORDS:
            end = self.i + len(name)
            if self.source.startswith(name, self.i) and not is_function_name_char(self._char_at(end)):
                out.write(value)
                self.i = end
                return True
        return False

    def _parse_unquoted_string(self, out: JsonRepairBuffer, is_key: bool = False) -> bool:
        s = self.source
        start = self.i
        if self._eof():
            return False
        if not is_key and self._regex_literal_end(start) != -1:
            return False

        if not is_key and is_function_name_start(s[start]):
            while self.i < self.n and is_function_name_char(s[self.i]):
                self.i += 1
            j = self._scan_whitespace(self.i)
            if self._char_at(j) == "(":
                # callback({...}); keeps only the argument
                self.i = self._scan_whitespace(j + 1)
                if self._peek() == ")" or not self._parse_value(out):
                    out.write("null")
                if self._skip_char(")"):
                    self._skip_char(";")
                return True

        while self.i < self.n and not is_unquoted_string_delimiter(s[self.i]):
            c = s[self.i]
            if is_control_character(c):
                break
            if is_quote(c):
                if is_key:
                    break
                j = self._scan_whitespace(self.i + 1)
                nc = self._char_at(j)
                if nc != "" and (is_unquoted_string_delimiter(nc) or nc in (":", "=")):
                    break
            if is_key and c in (":", "="):
                if not (c == ":" and self._is_url_scheme_before(self.i, start) and self._at_url_separator()):
                    break
            if c == "/" and self._peek(1) in ("/", "*") and not self._is_url_scheme_before(self.i - 1, start):
                break
            self.i += 1

        if self.i == start:
            return False
        end = self.i
        while end > start and is_whitespace(s[end - 1]):
            end -= 1
        symbol = s[start:end]
        if symbol == "undefined" and not is_key:
            out.write("null")
        else:
            content = _escape_bare(symbol)
            if self.options.trim_whitespace:
                content = _trim_escaped(content, leading=True)
            out.write('"' + content + '"')
        # a stray closing quote of a string that was never opened
        if self._peek() == '"':
            self.i += 1
        return True

    def _regex_literal_end(self, start: int) -> int:
        """
        Returns the end of a /pattern/flags literal starting at start, or -1.
        """
        s = self.source
        if self._char_at(start) != "/" or self._char_at(start + 1) in ("/", "*"):
            return -1
        k = start + 1
        while k < self.n and not is_newline(s[k]):
            if s[k] == "/" and s[k - 1] != "\\":
                break
            k += 1
        if k >= self.n or s[k] != "/":
            return -1
        k += 1
        while k < self.n and s[k] in self.REGEX_FLAGS:
            k += 1
        if k < self.n and not (is_whitespace(s[k]) or s[k] in (",", "}", "]", ")")):
            return -1
        return k

    def _parse_regex(self, out: JsonRepairBuffer) -> bool:
        end = self._regex_literal_end(self.i)
        if end == -1:
            return False
        out.write('"' + _escape_bare(self.source[self.i:end]) + '"')
        self.i = end
        return True

    def _parse_markdown_code_block(self, out: JsonRepairBuffer, fences: tuple[str, ...]) -> bool:
        self.i = self._scan_whitespace(self.i, out)
        for fence in fences:
            if self.source.startswith(fence, self.i):
                self.i += len(fence)
                # language tag, as in ```json
                if is_function_name_start(self._peek()):
                    while is_function_name_char(self._peek()):
                        self.i += 1
                self.i = self._scan_whitespace(self.i, out)
                return True
        return False

    def _parse_newline_delimited(self, out: JsonRepairBuffer) -> bool:
        processed = False
        while True:
            line = JsonRepairBuffer()
            if not self._parse_value(line):
                return processed
            if processed:
                out.write("\n")
            out.write(line.getvalue().strip())
            processed = True
            if not self._at_line_start():
                # rest of the line is garbage
                while not self._eof() and not is_newline(self._peek()):
                    self.i += 1
            while not self._eof() and is_newline(self._peek()):
                self.i += 1

    def _at_line_start(self) -> bool:
        k = self.i
        while k > 0 and is_whitespace(self.source[k - 1]) and not is_newline(self.source[k - 1]):
            k -= 1
        return k == 0 or is_newline(self.source[k - 1])

def repair(
    text: str,
    trim_whitespace: bool = False,
    options: JsonRepairOptions | None = None,
) -> JsonRepairResult[str, JsonRepairError]:
    """
    Repairs text into valid JSON.

    Returns a result holding either the repaired text or the JsonRepairError
    describing why nothing could be recovered. `trim_whitespace` is ignored
    when `options` is given.
    """
    if options is None:
        options = JsonRepairOptions(trim_whitespace=trim_whitespace)
    try:
        return JsonRepairResult.from_value(JsonRepairReader(text, options).repair())
    except JsonRepairError as e:
        logger.debug("Repair failed: %s", e)
        return JsonRepairResult.from_error(e)
