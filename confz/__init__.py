from .error import (
    BadConfigurationError,
    BadConfigurationException,
    FormatError,
    MissingOptionValueError,
    MissingRequiredOptionError,
    PropertiesFormatError,
    UnknownOptionError,
)
from .option import (
    Option,
    OptionMap,
    BoolOption,
    StringOption,
    IntegerOption,
    FloatOption,
    EnumOption,
    PathOption,
    StringListOption,
)
from .properties import LayeredProperties, load_properties, dump_properties, dumps_properties
from .group import OptionGroup, looks_like_flag
from .config import (
    Config,
    SHOW_HELP,
    SHOW_VERSION,
    DEBUG,
    CLASSPATH,
    WRITEPATH,
    STANDARD_OPTIONS,
)
from .interface import Interface
