import logging
import typing
from .option import Option, OptionMap
from .error import (
    BadConfigurationError,
    FormatError,
    MissingOptionValueError,
    MissingRequiredOptionError,
    UnknownOptionError,
)

logger = logging.getLogger(__name__)

_ABSENT = object()

NOT_SET = "<not set>"


def looks_like_flag(token: str) -> bool:
    """True for ``-x`` and ``--name`` style tokens; ``-``, ``-1`` are arguments."""
    if len(token) < 2 or token[0] != "-":
        return False
    if token[1] == "-":
        return len(token) > 2 and token[2].isalpha()
    return token[1].isalpha()


class OptionGroup:
    """Options of one configuration plus the argument parser working on them."""
    def __init__(self, config, prefix: str = None):
        self.config = config
        self.prefix = prefix
        self.options = OptionMap()
        self.groups: typing.Dict[str, "OptionGroup"] = {}

    def __repr__(self):
        return "{}[prefix={!r}]".format(type(self).__name__, self.prefix)

    def key_of(self, option: Option) -> str:
        if self.prefix is None:
            return option.name
        return "{}.{}".format(self.prefix, option.name)

    def add_option(self, option: Option):
        assert isinstance(option, Option), "not an option: {!r}".format(option)
        if self.prefix is not None:
            assert option.short is None, "short flags are not available in sub-group '{}'".format(self.prefix)
        self.options.add(option)

    def add_options(self, options: typing.Iterable[Option]):
        for option in options:
            self.add_option(option)

    def add_group(self, prefix: str) -> "OptionGroup":
        assert Option.LONG_PATTERN.search(prefix), "invalid group prefix: {!r}".format(prefix)
        if prefix not in self.groups:
            full = prefix if self.prefix is None else "{}.{}".format(self.prefix, prefix)
            self.groups[prefix] = OptionGroup(self.config, full)
        return self.groups[prefix]

    def get_group(self, prefix: str) -> typing.Optional["OptionGroup"]:
        return self.groups.get(prefix)

    def all_options(self) -> typing.List[typing.Tuple["OptionGroup", Option]]:
        """Every (group, option) pair, own options first in registration order."""
        result = [(self, opt) for opt in self.options]
        for group in self.groups.values():
            result.extend(group.all_options())
        return result

    def find_option(self, name: str) -> typing.Tuple[typing.Optional["OptionGroup"], typing.Optional[Option]]:
        """Resolve a key relative to this group, descending into sub-groups."""
        opt = self.options.get(name)
        if opt is not None:
            return self, opt
        for prefix, group in self.groups.items():
            if name.startswith(prefix + "."):
                found = group.find_option(name[len(prefix) + 1:])
                if found[1] is not None:
                    return found
        return None, None

    def has_option(self, key: str) -> bool:
        return self.find_option(key)[1] is not None

    def get_option_by_key(self, key: str) -> typing.Optional[Option]:
        return self.find_option(key)[1]

    def _parse(self, option: Option, key: str, text: str):
        try:
            return option.parse(text)
        except FormatError as e:
            if e.key == key:
                raise
            raise FormatError(key, e.value, e.reason) from e

    def _store(self, option: Option, text: str):
        key = self.key_of(option)
        value = self._parse(option, key, text)
        self.config.set_property(key, option.format(value))
        logger.debug("option %s = %r", key, value)

    @staticmethod
    def _take_value(args: typing.List[str], pos: int, token: str) -> typing.Tuple[str, int]:
        if pos >= len(args) or looks_like_flag(args[pos]):
            raise MissingOptionValueError(token)
        return args[pos], pos + 1

    def _consume_long(self, args, pos, token) -> int:
        name, sep, inline = token[2:].partition("=")
        if not sep:
            inline = None
        group, opt = self.find_option(name)
        text = inline
        if opt is None and name.startswith("no-") and inline is None:
            group, opt = self.find_option(name[3:])
            if opt is None or not opt.is_flag:
                raise UnknownOptionError(name, token)
            text = "false"
        elif opt is None:
            raise UnknownOptionError(name, token)
        elif opt.is_flag and text is None:
            text = "true"
        elif text is None:
            text, pos = self._take_value(args, pos, token)
        group._store(opt, text)
        return pos

    def _consume_short(self, args, pos, token) -> int:
        flags = token[1:]
        for i, c in enumerate(flags):
            opt = self.options.find("-" + c)
            if opt is None:
                raise UnknownOptionError(c, "-" + c)
            if opt.is_flag:
                self._store(opt, "true")
                continue
            rest = flags[i + 1:]
            if rest != "":
                # -ovalue
                self._store(opt, rest)
            else:
                text, pos = self._take_value(args, pos, "-" + c)
                self._store(opt, text)
            break
        return pos

    def consume_options(self, args: typing.Sequence[str]) -> typing.List[str]:
        """Parse leading option tokens and return the residual arguments."""
        args = list(args)
        pos = 0
        while pos < len(args):
            token = args[pos]
            if token == "--":
                pos += 1
                break
            if not looks_like_flag(token):
                break
            pos += 1
            if token.startswith("--"):
                pos = self._consume_long(args, pos, token)
            else:
                pos = self._consume_short(args, pos, token)
        residual = args[pos:]
        logger.debug("consumed %d of %d arguments, residual: %r", pos, len(args), residual)
        return residual

    def check_options(self):
        for group, opt in self.all_options():
            key = group.key_of(opt)
            if opt.is_required() and opt.default_value() is None and not self.config.is_present(key):
                raise MissingRequiredOptionError(key)

    def key_for(self, option: Option) -> str:
        """Key of ``option``, also when it is registered in a sub-group."""
        for group, opt in self.all_options():
            if opt is option:
                return group.key_of(opt)
        return self.key_of(option)

    def get_option(self, option: Option, default=_ABSENT):
        key = self.key_for(option)
        text = self.config.get_value(key)
        if text is None:
            if option.default_value() is not None:
                return option.default_value()
            if default is not _ABSENT:
                return default
            raise BadConfigurationError(key, "option has no value and no default")
        try:
            return self._parse(option, key, text)
        except FormatError as e:
            if default is not _ABSENT:
                raise
            raise BadConfigurationError(key, str(e)) from e

    def try_get_option(self, option: Option):
        key = self.key_for(option)
        text = self.config.get_value(key)
        if text is None:
            return option.default_value()
        return self._parse(option, key, text)

    def _resolved_text(self, option: Option) -> str:
        text = self.config.get_value(self.key_of(option))
        if text is not None:
            return text
        if option.default_value() is not None:
            return option.format(option.default_value())
        return NOT_SET

    def dump_configuration(self, indent: int = 0) -> str:
        lines = []
        for group, opt in self.all_options():
            lines.append("{}{:<20} ==> {}\n".format(" " * indent, group.key_of(opt), group._resolved_text(opt)))
        return "".join(lines)

    def format_help(self, indent: int = 2) -> str:
        items = []
        longest = 0
        for group, opt in self.all_options():
            flag = "--" + group.key_of(opt)
            if not opt.is_flag:
                flag = "{} <{}>".format(flag, opt.type_name)
            items.append([
                "  " if opt.short is None else "-" + opt.short,
                " " if opt.short is None else ",",
                flag,
                opt.help_text(),
            ])
            longest = max(longest, len(flag))
        lines = []
        for i in items:
            lines.append("{}{}{} {:{fill}}  {}".format(" " * indent, i[0], i[1], i[2], i[3], fill=longest).rstrip())
        return "\n".join(lines) + ("\n" if lines else "")
