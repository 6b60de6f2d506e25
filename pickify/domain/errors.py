"""Error taxonomy shared by adapters, screens and use cases."""


class PickifyError(Exception):
    """Base class for every error pickify reports to the user."""


class TransportError(PickifyError):
    """A call to the remote service failed."""


class IoError(PickifyError):
    """Configuration, cache or subprocess I/O failed."""


class ConfigIOError(IoError):
    pass


class TokenCacheError(IoError):
    pass


class MenuLauncherError(IoError):
    pass


class ListenerBindError(IoError):
    pass


class ParseError(PickifyError):
    """User input or a URL could not be interpreted."""


class SelectionParseError(ParseError):
    def __init__(self, selection: str):
        super().__init__(f"Failed to get index of selected item {selection!r}")
        self.selection = selection


class UrlMissingParamError(ParseError):
    def __init__(self, param: str):
        super().__init__(f"Url missing required param: {param}")
        self.param = param


class StateMismatchError(ParseError):
    pass


class StateError(PickifyError):
    """The player or an item is not in a state that allows the action."""


class NoPlaybackContextError(StateError):
    def __init__(self):
        super().__init__("Nothing is playing right now.")


class NotATrackError(StateError):
    def __init__(self):
        super().__init__("Item is not a playable track.")


class MissingIdentifierError(StateError):
    def __init__(self, name: str):
        super().__init__(f"No id found for {name}")
        self.name = name


class NotificationError(PickifyError):
    pass


class AuthError(PickifyError):
    """Authorization was denied or the code exchange failed."""


class SelectionOutOfRange(IndexError):
    """A parsed index does not address an item of the current screen."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Selected index {index} is outside of 0..{size - 1}")
        self.index = index
        self.size = size
