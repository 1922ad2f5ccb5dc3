"""Flat ``key=value`` property streams and the two-layer property store."""
import io
import logging
import typing
from .error import PropertiesFormatError

logger = logging.getLogger(__name__)

_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _ends_with_continuation(line: str) -> bool:
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(stream) -> typing.Iterator[typing.Tuple[int, str]]:
    pending = None
    start = 0
    for lineno, raw in enumerate(stream, 1):
        if isinstance(raw, bytes):
            raw = raw.decode("latin-1")
        line = raw.rstrip("\r\n")
        if pending is None:
            line = line.lstrip(_WHITESPACE)
            if line == "" or line[0] in "#!":
                continue
            start = lineno
            pending = ""
        else:
            line = line.lstrip(_WHITESPACE)
        if _ends_with_continuation(line):
            pending += line[:-1]
            continue
        yield start, pending + line
        pending = None
    if pending is not None:
        yield start, pending


def _unescape(text: str, lineno: int) -> str:
    if "\\" not in text:
        return text
    out = []
    i = 0
    while i < len(text):
        c = text[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        i += 1
        if i >= len(text):
            break
        c = text[i]
        if c == "u":
            digits = text[i + 1:i + 5]
            try:
                if len(digits) != 4:
                    raise ValueError(digits)
                out.append(chr(int(digits, 16)))
            except ValueError:
                raise PropertiesFormatError(lineno, "malformed \\uXXXX escape: {!r}".format("\\u" + digits))
            i += 5
        else:
            out.append(_ESCAPES.get(c, c))
            i += 1
    return "".join(out)


def _split_entry(line: str) -> typing.Tuple[str, str]:
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def load_properties(stream) -> typing.Dict[str, str]:
    """Read a properties stream (text, or latin-1 bytes) into an ordered dict."""
    if isinstance(stream, (str, bytes)):
        raise TypeError("expected a stream, got {}".format(type(stream).__name__))
    entries = {}
    for lineno, line in _logical_lines(stream):
        key, value = _split_entry(line)
        entries[_unescape(key, lineno)] = _unescape(value, lineno)
    return entries


def _escape(text: str, is_key: bool) -> str:
    out = []
    for i, c in enumerate(text):
        if c == "\\":
            out.append("\\\\")
        elif c in "\t\n\r\f":
            out.append("\\" + {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}[c])
        elif c in "=:#!" or (c == " " and (is_key or i == 0)):
            out.append("\\" + c)
        else:
            out.append(c)
    return "".join(out)


def dump_properties(entries: typing.Mapping[str, str], stream) -> None:
    for key, value in entries.items():
        stream.write("{}={}\n".format(_escape(key, True), _escape(value, False)))


def dumps_properties(entries: typing.Mapping[str, str]) -> str:
    buf = io.StringIO()
    dump_properties(entries, buf)
    return buf.getvalue()


class LayeredProperties:
    """Explicit values chained onto an optional default layer."""
    def __init__(self, defaults: typing.Optional[typing.Dict[str, str]] = None):
        self.defaults = defaults
        self.values: typing.Dict[str, str] = {}

    def lookup_order(self) -> typing.List[typing.Dict[str, str]]:
        if self.defaults is None:
            return [self.values]
        return [self.values, self.defaults]

    def get(self, key: str, default: str = None) -> typing.Optional[str]:
        for layer in self.lookup_order():
            value = layer.get(key)
            if value is not None:
                return value
        return default

    def __contains__(self, key):
        return key in self.values

    def is_present(self, key: str) -> bool:
        return self.get(key) is not None

    def set(self, key: str, value: str) -> typing.Optional[str]:
        old = self.values.get(key)
        self.values[key] = value
        return old

    def set_default(self, key: str, value: str) -> typing.Optional[str]:
        if self.defaults is None:
            self.defaults = {}
        old = self.defaults.get(key)
        self.defaults[key] = value
        return old

    def update(self, entries: typing.Mapping[str, str]) -> None:
        self.values.update(entries)

    def clear(self) -> None:
        self.values.clear()

    def rebase(self, defaults: typing.Optional[typing.Dict[str, str]]) -> None:
        """Replace the default layer, keeping every explicit value."""
        old = self.values
        self.defaults = defaults
        self.values = {}
        self.update(old)
        logger.debug("replaced default layer (%d defaults, %d explicit values kept)",
                     0 if defaults is None else len(defaults), len(self.values))

    def explicit_items(self) -> typing.List[typing.Tuple[str, str]]:
        return list(self.values.items())

    def items(self) -> typing.List[typing.Tuple[str, str]]:
        """Flattened view of every resolvable key."""
        merged = {}
        if self.defaults is not None:
            merged.update(self.defaults)
        merged.update(self.values)
        return list(merged.items())
