"""Exception hierarchy for the renderer.

Invalid user input (configuration values, scene descriptions) raises a
subclass of both RenderError and ValueError, so callers can catch either.
"""


class RenderError(Exception):
    """Base class for all renderer errors."""


class ConfigError(RenderError, ValueError):
    """A render configuration holds values the renderer cannot use."""


class InvalidAspectRatio(ConfigError):
    """The image is not wider than it is tall.

    The camera model scales the horizontal sensor coordinate by
    width / height and requires width > height.
    """

    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            f"Image width must be greater than its height, got {width}x{height}"
        )
        self.width = width
        self.height = height


class SceneFormatError(ConfigError):
    """A scene description is malformed (unknown keys, bad values, bad tags)."""


class DegenerateVector(RenderError, ValueError):
    """A zero-length vector was normalized.

    This is a programming error: callers must never normalize a vector of
    zero magnitude.
    """
