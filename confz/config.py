import logging
import typing
from .option import BoolOption, Option, StringOption
from .group import OptionGroup, NOT_SET, _ABSENT
from .properties import LayeredProperties, load_properties

logger = logging.getLogger(__name__)

# options which are always present
SHOW_HELP = BoolOption("help", "show help", short="h", default=False)
SHOW_VERSION = BoolOption("version", "get version number", default=False)
DEBUG = BoolOption("debug", "verbose debugging mode", default=False)
CLASSPATH = StringOption("cp", "classpath of target app", default=".")
WRITEPATH = StringOption("out", "path to write generated classfiles", default="out")

STANDARD_OPTIONS = (SHOW_HELP, SHOW_VERSION, DEBUG)


class Config:
    """Layered key/value configuration with typed option access.

    Explicit values (property streams, command line, ``set_property``) live
    in an override layer which falls back to an optional default layer.
    Options are registered with the root ``OptionGroup`` (``config.options``).
    """
    def __init__(self, defaults: typing.Optional[typing.Dict[str, str]] = None):
        self.props = LayeredProperties(defaults)
        self.options = OptionGroup(self)

    @property
    def properties(self) -> LayeredProperties:
        return self.props

    def add_properties(self, stream, prefix: str = None):
        """Merge a properties stream into the explicit layer.

        Existing keys are replaced. With a non-empty ``prefix`` every key is
        stored as ``prefix.key``.
        """
        entries = load_properties(stream)
        pfx = "" if not prefix else prefix + "."
        self.props.update({pfx + key: value for key, value in entries.items()})
        logger.debug("loaded %d properties (prefix=%r)", len(entries), prefix)

    def add_properties_file(self, path, prefix: str = None):
        with open(path, "r", encoding="latin-1") as stream:
            self.add_properties(stream, prefix)

    def parse_arguments(self, args: typing.Sequence[str]) -> typing.List[str]:
        return self.options.consume_options(args)

    def check_options(self):
        self.options.check_options()

    def set_defaults(self, defaults: typing.Optional[typing.Dict[str, str]]):
        self.props.rebase(defaults)

    def clear_values(self):
        self.props.clear()

    def set_property(self, key: str, value: str, set_default: bool = False) -> typing.Optional[str]:
        """Set ``key`` in the explicit layer (or the default layer) and return the old value there."""
        if set_default:
            return self.props.set_default(key, value)
        return self.props.set(key, value)

    def is_set(self, key: str) -> bool:
        return key in self.props

    def is_present(self, key: str) -> bool:
        return self.props.is_present(key)

    def get_value(self, key: str, default: str = None) -> typing.Optional[str]:
        return self.props.get(key, default)

    def add_option(self, option: Option):
        self.options.add_option(option)

    def add_options(self, options: typing.Iterable[Option]):
        self.options.add_options(options)

    def get_option(self, option: Option, default=_ABSENT):
        return self.options.get_option(option, default)

    def try_get_option(self, option: Option):
        return self.options.try_get_option(option)

    def dump_configuration(self, indent: int = 0) -> str:
        """Dump every resolvable property, for debugging.

        ``config.options.dump_configuration`` lists registered options instead.
        """
        lines = []
        for key, value in self.props.items():
            lines.append("{}{:<20} ==> {}\n".format(" " * indent, key, NOT_SET if value is None else value))
        return "".join(lines)
