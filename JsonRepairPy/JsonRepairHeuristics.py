"""
Heuristics that guess what kind of text a string holds.

The reader only needs one answer from this module: whether backslashes in a
string are path separators (to be doubled verbatim) or escape introducers.
Everything else here feeds that decision.
"""

import re

from .JsonRepairChars import is_quote, is_delimiter, is_whitespace

_DRIVE_LETTER_RE = re.compile(r"^[A-Za-z]:\\")
_CONTAINS_DRIVE_RE = re.compile(r"[A-Za-z]:\\")
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/=]{20,}$")
_FILE_EXTENSION_RE = re.compile(r"\.[a-z0-9]{2,5}(\?|$|\\|\"|/)", re.IGNORECASE)
_UNICODE_ESCAPE_RE = re.compile(r"\\u[0-9a-fA-F]{4}")
_URL_ENCODING_RE = re.compile(r"%[0-9a-fA-F]{2}")

class PathPatterns:
    """
    Word lists used to recognise file system paths.

    The defaults cover common Windows and Unix/macOS layouts. Pass an
    instance with different lists through JsonRepairOptions to tune the
    detection for other locales.
    """

    # Fragments of well known Windows directories.
    windows_patterns: tuple[str, ...] = (
        "program files", "system32", "windows\\", "programdata",
        "users\\", "documents", "desktop", "downloads", "music", "pictures", "videos", "appdata", "roaming", "public",
        "temp\\", "fonts", "startup", "sendto", "recent", "nethood", "cookies", "cache", "history", "favorites", "templates",
    )
    # Well known Unix/macOS directories.
    unix_patterns: tuple[str, ...] = (
        "/bin/", "/etc/", "/var/", "/usr/", "/opt/", "/home/", "/tmp/", "/lib/", "/lib64/",
        "/proc/", "/dev/", "/sys/", "/run/", "/srv/", "/mnt/", "/media/", "/boot/", "/snap/",
        "/usr/share/", "/usr/local/", "/usr/src/", "/var/log/", "/var/lib/", "/var/cache/", "/var/spool/",
        "/applications/", "/library/", "/system/", "/users/",
    )
    # Directory names that make a short separator-bearing string look like a path.
    directory_names: tuple[str, ...] = (
        "program files", "windows", "users", "temp", "system32", "documents", "programdata",
        "desktop", "downloads", "music", "pictures", "videos", "appdata", "roaming", "public",
        "inetpub", "wwwroot", "node_modules", "npm",
    )
    # File extensions commonly found at the end of a path.
    file_extensions: tuple[str, ...] = (
        ".config", ".cfg", ".ini", ".conf", ".properties", ".toml",
        ".json", ".xml", ".yml", ".yaml", ".csv", ".tsv",
        ".backup", ".bak", ".old", ".tmp", ".temp", ".swp", ".~",
        ".log", ".out", ".err", ".debug", ".trace",
        ".db", ".sqlite", ".sqlite3", ".mdb",
        ".txt", ".md", ".readme", ".doc", ".docx", ".pdf",
        ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
        ".js", ".ts", ".py", ".go", ".java", ".cpp", ".c", ".h", ".cs", ".php", ".rb", ".rs",
        ".mp3", ".mp4", ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".svg", ".ico",
        ".dat", ".bin", ".raw", ".dump",
    )

    def __init__(
        self,
        windows_patterns: tuple[str, ...] | None = None,
        unix_patterns: tuple[str, ...] | None = None,
        directory_names: tuple[str, ...] | None = None,
        file_extensions: tuple[str, ...] | None = None,
    ) -> None:
        # Comparisons are made against lowercased content.
        if windows_patterns is not None:
            self.windows_patterns = tuple(p.lower() for p in windows_patterns)
        if unix_patterns is not None:
            self.unix_patterns = tuple(p.lower() for p in unix_patterns)
        if directory_names is not None:
            self.directory_names = tuple(p.lower() for p in directory_names)
        if file_extensions is not None:
            self.file_extensions = tuple(p.lower() for p in file_extensions)

DEFAULT_PATH_PATTERNS = PathPatterns()

def has_excessive_escape_sequences(content: str) -> bool:
    """
    Whether the content is mostly escape sequences, i.e. encoded data rather than a path.
    """
    if len(content) < 3:
        return False
    unicode_matches = _UNICODE_ESCAPE_RE.findall(content)
    if len(unicode_matches) >= 2 and len(unicode_matches) * 6 / len(content) > 0.6:
        return True
    escape_count = 0
    for i in range(len(content) - 1):
        if content[i] == "\\" and content[i + 1] in "ntrbf\"\\":
            escape_count += 1
    return escape_count > 0 and escape_count * 2 / len(content) > 0.3

def is_likely_text_blob(content: str) -> bool:
    """
    Whether the content reads like natural language.
    """
    if len(content) < 3:
        return False
    if "  " in content:
        return True
    if "\n" in content or "\t" in content or "\r" in content:
        return True
    if ". " in content or "! " in content or "? " in content:
        return True
    space_count = content.count(" ")
    if space_count > 5:
        return True
    if len(content) > 10 and "A" <= content[0] <= "Z" and space_count > 2:
        # Capitalised sentence: count lowercase letters that follow a space
        lowercase_after_space = 0
        found_space = False
        for c in content[1:]:
            if c == " ":
                found_space = True
            elif found_space and "a" <= c <= "z":
                lowercase_after_space += 1
        if lowercase_after_space >= 3:
            return True
    return False

def is_base64_string(content: str) -> bool:
    return len(content) >= 20 and _BASE64_RE.match(content) is not None

def has_url_encoding(content: str) -> bool:
    return _URL_ENCODING_RE.search(content) is not None

def is_windows_absolute_path(content: str) -> bool:
    return _DRIVE_LETTER_RE.match(content) is not None or _CONTAINS_DRIVE_RE.search(content) is not None

def is_unc_path(content: str) -> bool:
    if not content.startswith("\\\\") or content.startswith("\\\\\\\\"):
        return False
    parts = content.split("\\")
    return len(parts) >= 4 and len(parts[2]) > 0 and len(parts[3]) > 0

def is_unix_absolute_path(content: str, patterns: PathPatterns = DEFAULT_PATH_PATTERNS) -> bool:
    if content.startswith("~/"):
        return True
    if content.startswith("/") and len(content) > 1:
        # "/ " and "/)" are punctuation, not roots
        if is_whitespace(content[1]) or content[1] in ")]}":
            return False
        if content.count("/") >= 2:
            return True
        lower = content.lower()
        for p in patterns.unix_patterns:
            if lower.startswith(p):
                return True
    return False

def contains_path_separator(content: str) -> bool:
    return "/" in content or "\\" in content

def count_valid_path_segments(content: str, separator: str) -> int:
    count = 0
    for part in content.split(separator):
        part = part.strip()
        if part and part != "." and part != "..":
            count += 1
    return count

def has_file_extension(content: str) -> bool:
    name = content[content.rfind("/") + 1:]
    dot = name.rfind(".")
    if dot != -1 and 1 < len(name) - dot <= 6:
        return True
    return _FILE_EXTENSION_RE.search(content) is not None

def has_valid_path_structure(path: str, patterns: PathPatterns = DEFAULT_PATH_PATTERNS) -> bool:
    if len(path) < 2 or not contains_path_separator(path):
        return False
    separator = "\\" if "\\" in path else "/"
    segments = count_valid_path_segments(path, separator)
    if segments < 2:
        return False
    if has_file_extension(path) or segments >= 3:
        return True
    lower = path.lower()
    for name in patterns.directory_names:
        if name in lower:
            return True
    if path.startswith("/"):
        for p in patterns.unix_patterns:
            if p in lower:
                return True
    return False

def is_url_path(content: str, patterns: PathPatterns = DEFAULT_PATH_PATTERNS) -> bool:
    """
    Whether the content is a file://, smb:// or ftp:// URL with a real path part.
    """
    lower = content.lower()
    if lower.startswith("http://") or lower.startswith("https://"):
        return False
    if lower.startswith("file://"):
        path = content[7:]
        return len(path) > 1 and has_valid_path_structure(path, patterns)
    if lower.startswith("smb://"):
        path = content[6:]
        return len(path) > 1 and has_valid_path_structure(path, patterns)
    if lower.startswith("ftp://"):
        rest = content[6:]
        slash = rest.find("/")
        if slash > 0:
            return has_valid_path_structure(rest[slash:], patterns)
    return False

def is_excluded_url(content: str) -> bool:
    lower = content.lower()
    if lower.startswith("http://") or lower.startswith("https://"):
        return True
    return lower.startswith("ftp://") and "/" not in content[6:]

def passes_early_exclusion_filters(content: str) -> bool:
    return not (
        has_excessive_escape_sequences(content)
        or is_likely_text_blob(content)
        or is_base64_string(content)
        or has_url_encoding(content)
    )

def is_likely_file_path(content: str, patterns: PathPatterns = DEFAULT_PATH_PATTERNS) -> bool:
    if len(content) < 2:
        return False
    if is_excluded_url(content):
        return False
    if (
        is_url_path(content, patterns)
        or is_windows_absolute_path(content)
        or is_unc_path(content)
        or is_unix_absolute_path(content, patterns)
    ):
        return True
    if not passes_early_exclusion_filters(content):
        return False
    lower = content.lower()
    if contains_path_separator(content):
        for p in patterns.windows_patterns:
            if p in lower:
                return True
    for p in patterns.unix_patterns:
        if p in lower:
            return True
    if contains_path_separator(content):
        for ext in patterns.file_extensions:
            if lower.endswith(ext):
                return True
    return False

def analyze_potential_file_path(source: str, start: int, patterns: PathPatterns = DEFAULT_PATH_PATTERNS) -> bool:
    """
    Looks at the raw token starting at `start` (quoted or bare) and decides
    whether its content is a file path.
    """
    n = len(source)
    if start < 0 or start >= n:
        return False
    end = start
    if is_quote(source[end]):
        quote = source[end]
        end += 1
        while end < n:
            if source[end] == quote and source[end - 1] != "\\":
                end += 1
                break
            end += 1
    else:
        while end < n and not is_delimiter(source[end]) and not is_whitespace(source[end]):
            end += 1
    content = source[start:end]
    if content and is_quote(content[0]):
        content = content[1:]
        if content and is_quote(content[-1]):
            content = content[:-1]
    return is_likely_file_path(content, patterns)
