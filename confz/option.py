import enum
import re
import typing
from pathlib import Path
from .error import FormatError

class Option:
    """Typed descriptor for a single configurable value."""
    LONG_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_.-]*$")
    SHORT_PATTERN = re.compile(r"^[a-zA-Z]$")
    SHORT_NONE = None

    type_name = "value"
    # flags never consume the following token on the command line
    is_flag = False

    def __init__(self, name: str, help: str = None, short: str = SHORT_NONE, default=None, required: bool = False):
        assert Option.LONG_PATTERN.search(name), "invalid option name: {!r}".format(name)
        self.name = name
        self.short = short
        if self.short is not None:
            assert Option.SHORT_PATTERN.search(self.short), "invalid short flag: {!r}".format(short)
        self.help = help
        assert isinstance(self.help, (str, type(None))), "option help must be of type str"
        self.required = bool(required)
        self.default = default
        if default is not None:
            try:
                self.parse(self.format(default))
            except FormatError as e:
                raise ValueError("invalid default for option '{}': {!r}".format(name, default)) from e

    def __repr__(self):
        return "{}[name='{}']".format(type(self).__name__, self.name)

    def matches_long(self, token: str) -> bool:
        return token == "--" + self.name

    def matches_short(self, token: str) -> bool:
        return self.short is not None and token == "-" + self.short

    def is_required(self) -> bool:
        return self.required

    def default_value(self):
        return self.default

    def parse(self, text: str):
        if not isinstance(text, str):
            raise FormatError(self.name, repr(text), "not a string")
        try:
            return self.convert(text)
        except ValueError as e:
            raise FormatError(self.name, text, str(e) or None) from e

    def convert(self, text: str):
        raise NotImplementedError

    def format(self, value) -> str:
        return str(value)

    def describe_values(self) -> str:
        """Extra help text describing accepted values, if any."""
        return ""

    def help_text(self) -> str:
        parts = [] if self.help is None else [self.help]
        extra = self.describe_values()
        if extra:
            parts.append(extra)
        if self.required:
            parts.append("[required]")
        elif self.default is not None:
            parts.append("[default: {}]".format(self.format(self.default)))
        return " ".join(parts)


class BoolOption(Option):
    TRUE = ("true", "yes", "on", "1")
    FALSE = ("false", "no", "off", "0")

    type_name = "bool"
    is_flag = True

    def convert(self, text):
        lowered = text.strip().lower()
        if lowered in BoolOption.TRUE:
            return True
        if lowered in BoolOption.FALSE:
            return False
        raise ValueError("expected one of {}".format(", ".join(BoolOption.TRUE + BoolOption.FALSE)))

    def format(self, value):
        return "true" if value else "false"


class StringOption(Option):
    type_name = "string"

    def convert(self, text):
        return text


class IntegerOption(Option):
    type_name = "int"

    def __init__(self, name, help=None, short=Option.SHORT_NONE, default=None, required=False, minimum=None, maximum=None):
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(name, help, short=short, default=default, required=required)

    def convert(self, text):
        text = text.strip()
        unsigned = text.lstrip("+-")
        if unsigned[:2].lower() in ("0x", "0o", "0b"):
            value = int(text, 0)
        else:
            value = int(text)
        if self.minimum is not None and value < self.minimum:
            raise ValueError("must be >= {}".format(self.minimum))
        if self.maximum is not None and value > self.maximum:
            raise ValueError("must be <= {}".format(self.maximum))
        return value

    def describe_values(self):
        if self.minimum is None and self.maximum is None:
            return ""
        return "[range: {}..{}]".format(
            "" if self.minimum is None else self.minimum,
            "" if self.maximum is None else self.maximum)


class FloatOption(Option):
    type_name = "float"

    def convert(self, text):
        return float(text.strip())


class EnumOption(Option):
    """Choices are strings or the member names of an ``enum.Enum`` subclass."""
    type_name = "choice"

    def __init__(self, name, help=None, choices=(), short=Option.SHORT_NONE, default=None, required=False):
        if isinstance(choices, type) and issubclass(choices, enum.Enum):
            self.enum_type = choices
            self.choices = [m.name for m in choices]
        else:
            self.enum_type = None
            self.choices = list(choices)
        assert len(self.choices) > 0, "enum option '{}' needs at least one choice".format(name)
        super().__init__(name, help, short=short, default=default, required=required)

    def convert(self, text):
        for choice in self.choices:
            if choice.lower() == text.strip().lower():
                return choice if self.enum_type is None else self.enum_type[choice]
        raise ValueError("choose from {}".format(", ".join(self.choices)))

    def format(self, value):
        if isinstance(value, enum.Enum):
            return value.name
        return str(value)

    def describe_values(self):
        return "{{{}}}".format("|".join(self.choices))


class PathOption(Option):
    type_name = "path"

    def convert(self, text):
        if text.strip() == "":
            raise ValueError("empty path")
        return Path(text)


class StringListOption(Option):
    type_name = "list"
    SEPARATOR = ","

    def convert(self, text):
        return [item.strip() for item in text.split(self.SEPARATOR) if item.strip() != ""]

    def format(self, value):
        return self.SEPARATOR.join(str(v) for v in value)


class OptionMap:
    """Index of options by long key and by short flag."""
    def __init__(self):
        self.map: typing.Dict[str, Option] = {}
        self.short_map: typing.Dict[str, Option] = {}

    def __getitem__(self, key):
        return self.map[key]

    def __contains__(self, key):
        return key in self.map

    def __iter__(self):
        return iter(self.map.values())

    def __len__(self):
        return len(self.map)

    def add(self, opt: Option):
        current = self.map.get(opt.name)
        if current is opt:
            return
        if current is not None:
            raise ValueError("duplicate option: {}".format(opt.name))
        if opt.short is not None and opt.short in self.short_map:
            raise ValueError("duplicate short flag '-{}' for option {} (used by {})".format(
                opt.short, opt.name, self.short_map[opt.short].name))
        self.map[opt.name] = opt
        if opt.short is not None:
            self.short_map[opt.short] = opt

    def get(self, name) -> Option:
        return self.map.get(name, None)

    def get_short(self, short) -> Option:
        return self.short_map.get(short, None)

    def find(self, token: str) -> Option:
        """Return the option whose long or short spelling equals ``token``."""
        if token.startswith("--"):
            opt = self.map.get(token[2:])
            return opt if opt is not None and opt.matches_long(token) else None
        if token.startswith("-"):
            opt = self.short_map.get(token[1:])
            return opt if opt is not None and opt.matches_short(token) else None
        return None
