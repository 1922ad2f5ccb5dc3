class BadConfigurationException(Exception):
    """Recoverable configuration problem, usually caused by user input."""
    pass

class FormatError(BadConfigurationException, ValueError):
    def __init__(self, key: str, value: str, reason: str = None):
        self.key = key
        self.value = value
        self.reason = reason
        msg = "invalid value for option '{}': {!r}".format(key, value)
        if reason:
            msg = "{} ({})".format(msg, reason)
        super().__init__(msg)

class UnknownOptionError(BadConfigurationException):
    def __init__(self, option: str, token: str = None):
        self.option = option
        self.token = token if token is not None else option
        super().__init__("unknown option: {}".format(self.token))

class MissingOptionValueError(BadConfigurationException):
    def __init__(self, option: str):
        self.option = option
        super().__init__("missing value for option: {}".format(option))

class MissingRequiredOptionError(BadConfigurationException):
    def __init__(self, key: str):
        self.key = key
        super().__init__("missing required option '{}'".format(key))

class PropertiesFormatError(IOError):
    def __init__(self, lineno: int, message: str):
        self.lineno = lineno
        super().__init__("line {}: {}".format(lineno, message))

class BadConfigurationError(Exception):
    """Invariant violation: an option was read that validation should have caught."""
    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__("{}: {}".format(key, message))
