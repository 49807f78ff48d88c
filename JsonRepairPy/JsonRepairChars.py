"""
Character classification used by the repair reader.

All predicates take a single character (a one code point string) and never
look at context.
"""

# Unicode spaces that are repaired to a plain ASCII space.
SPECIAL_WHITESPACE_CHARS = frozenset([
    '\u00A0', '\u1680', '\u2000', '\u2001', '\u2002', '\u2003', '\u2004', '\u2005', '\u2006',
    '\u2007', '\u2008', '\u2009', '\u200A', '\u202F', '\u205F', '\u3000',
])
WHITESPACE_CHARS = frozenset([' ', '\n', '\t', '\r']) | SPECIAL_WHITESPACE_CHARS

DOUBLE_QUOTE_LIKE_CHARS = frozenset(['"', '\u201C', '\u201D'])
SINGLE_QUOTE_LIKE_CHARS = frozenset(["'", '\u2018', '\u2019', '`', '\u00B4'])
QUOTE_CHARS = DOUBLE_QUOTE_LIKE_CHARS | SINGLE_QUOTE_LIKE_CHARS

# Characters that end a number or separate structural tokens.
DELIMITER_CHARS = frozenset([',', ':', '[', ']', '/', '{', '}', '(', ')', '\n'])
# Characters that end a bare word.
UNQUOTED_STRING_DELIMITER_CHARS = frozenset([',', '[', ']', '{', '}', '+', ' ', '\t', '\n', '\r'])

# Characters allowed after a backslash in a JSON string.
ESCAPE_CHARS = frozenset(['"', '\\', '/', 'b', 'f', 'n', 'r', 't', 'u'])
# Short escapes for control characters; the rest use \u00XX.
CONTROL_CHAR_ESCAPES = {
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}

_HEX_CHARS = frozenset('0123456789abcdefABCDEF')

def is_whitespace(c: str) -> bool:
    return c in WHITESPACE_CHARS

def is_special_whitespace(c: str) -> bool:
    return c in SPECIAL_WHITESPACE_CHARS

def is_newline(c: str) -> bool:
    return c == '\n' or c == '\r'

def is_quote(c: str) -> bool:
    return c in QUOTE_CHARS

def is_double_quote(c: str) -> bool:
    return c == '"'

def is_double_quote_like(c: str) -> bool:
    return c in DOUBLE_QUOTE_LIKE_CHARS

def is_single_quote(c: str) -> bool:
    return c == "'"

def is_single_quote_like(c: str) -> bool:
    return c in SINGLE_QUOTE_LIKE_CHARS

def is_delimiter(c: str) -> bool:
    return c in DELIMITER_CHARS

def is_unquoted_string_delimiter(c: str) -> bool:
    return c in UNQUOTED_STRING_DELIMITER_CHARS

def is_digit(c: str) -> bool:
    return '0' <= c <= '9'

def is_hex(c: str) -> bool:
    return c in _HEX_CHARS

def is_letter(c: str) -> bool:
    # ASCII only
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z')

def is_control_character(c: str) -> bool:
    return '\x00' <= c <= '\x1f'

def is_surrogate(c: str) -> bool:
    return '\ud800' <= c <= '\udfff'

def is_function_name_start(c: str) -> bool:
    return is_letter(c) or c == '_' or c == '$'

def is_function_name_char(c: str) -> bool:
    return is_function_name_start(c) or is_digit(c)

def is_start_of_value(c: str) -> bool:
    """
    Whether a character can begin a JSON value or a bare word.
    """
    return is_letter(c) or is_digit(c) or c == "_" or c == "{" or c == "[" or c == "-" or is_quote(c)

def escape_control_character(c: str) -> str:
    escaped = CONTROL_CHAR_ESCAPES.get(c)
    if escaped is not None:
        return escaped
    return f"\\u{ord(c):04x}"
