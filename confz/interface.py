import logging
import sys
import typing
from .config import Config, SHOW_HELP, SHOW_VERSION, DEBUG, STANDARD_OPTIONS
from .error import BadConfigurationException

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


class Interface:
    """Command line entry point of a tool built on a ``Config``."""
    def __init__(self, config: Config, name: str, version: str = None, usage: str = None, help: str = None):
        assert isinstance(config, Config)
        self.config = config
        self.name = name
        self.version = version
        self.usage = usage
        self.help = help
        config.add_options(STANDARD_OPTIONS)

    def format_usage(self) -> str:
        return "Usage: {} {}".format(self.name, "[options]" if self.usage is None else self.usage)

    def print_help(self, file=None):
        file = sys.stdout if file is None else file
        print(self.format_usage(), file=file)
        if self.help is not None:
            print("", file=file)
            print(self.help, file=file)
        options = self.config.options.format_help()
        if options:
            print("\nOptions:", file=file)
            print(options, end="", file=file)

    def configure_logging(self):
        debug = self.config.try_get_option(DEBUG)
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.WARNING,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        if debug:
            logger.debug("effective configuration:\n%s", self.config.options.dump_configuration(2))

    def run(self, args: typing.Sequence[str], main: typing.Callable[[Config, typing.List[str]], typing.Optional[int]]) -> int:
        try:
            rest = self.config.parse_arguments(args)
            if self.config.try_get_option(SHOW_HELP):
                self.print_help()
                return EXIT_OK
            if self.config.try_get_option(SHOW_VERSION):
                print("{} {}".format(self.name, "unknown" if self.version is None else self.version))
                return EXIT_OK
            self.config.check_options()
            self.configure_logging()
        except BadConfigurationException as e:
            self.print_help(sys.stderr)
            print("\nERROR: {}".format(e), file=sys.stderr)
            return EXIT_USAGE
        result = main(self.config, rest)
        return EXIT_OK if result is None else result
