"""Linear-light RGB colors and display conversion.

Colors are kept in linear light while shading. Components may leave the
[0, 1] range during accumulation (several lights adding up, for example)
and are clamped once before display conversion.

Display conversion applies gamma encoding with GAMMA = 2.2:
    encoded = linear ** (1 / GAMMA)
    byte = int(encoded * 255)

and from_display performs the inverse:
    linear = (byte / 255) ** GAMMA

Example:
    >>> from fever_ray.core.color import Color
    >>> c = Color(0.5, 0.25, 2.0)
    >>> c.clamp()
    Color(red=0.5, green=0.25, blue=1.0)
    >>> Color.white().to_display()
    (255, 255, 255)
"""

from __future__ import annotations

from dataclasses import dataclass

# Display gamma used for 8-bit encoding
GAMMA = 2.2


def gamma_encode(linear: float) -> float:
    """Gamma-encode a linear channel value in [0, 1]."""
    return linear ** (1.0 / GAMMA)


def gamma_decode(encoded: float) -> float:
    """Gamma-decode an encoded channel value in [0, 1]."""
    return encoded**GAMMA


def _clamp_channel(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class Color:
    """A linear-light RGB color.

    Attributes:
        red: Red channel (linear, unconstrained during accumulation).
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    @staticmethod
    def black() -> Color:
        """Pure black; the additive identity for light accumulation."""
        return Color(0.0, 0.0, 0.0)

    @staticmethod
    def white() -> Color:
        """Pure white."""
        return Color(1.0, 1.0, 1.0)

    def clamp(self) -> Color:
        """Clamp each channel independently to [0, 1]."""
        return Color(
            _clamp_channel(self.red),
            _clamp_channel(self.green),
            _clamp_channel(self.blue),
        )

    def to_display(self) -> tuple[int, int, int]:
        """Convert to a gamma-encoded 8-bit (r, g, b) triple.

        The color is clamped first so that out-of-range values can never
        overflow the 8-bit range. Scaling to 255 rounds toward zero.

        Returns:
            A tuple of three ints in [0, 255].
        """
        clamped = self.clamp()
        return (
            int(gamma_encode(clamped.red) * 255.0),
            int(gamma_encode(clamped.green) * 255.0),
            int(gamma_encode(clamped.blue) * 255.0),
        )

    @staticmethod
    def from_display(rgb: tuple[int, int, int]) -> Color:
        """Convert a gamma-encoded 8-bit (r, g, b) triple to linear light.

        Args:
            rgb: Three ints in [0, 255].

        Returns:
            The linear color, each channel in [0, 1].
        """
        r, g, b = rgb
        return Color(
            gamma_decode(r / 255.0),
            gamma_decode(g / 255.0),
            gamma_decode(b / 255.0),
        )

    @staticmethod
    def from_rgb_hex(value: int) -> Color:
        """Create a color from a 24-bit 0xRRGGBB value.

        Channels are scaled by 1/255 without gamma decoding.

        Example:
            >>> Color.from_rgb_hex(0xFF00FF)
            Color(red=1.0, green=0.0, blue=1.0)
        """
        return Color(
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )

    @staticmethod
    def from_rgba_hex(value: int) -> Color:
        """Create a color from a 32-bit 0xRRGGBBAA value, ignoring alpha."""
        return Color.from_rgb_hex(value >> 8)

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color filters elementwise; Color * scalar attenuates
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, other: float) -> Color:
        return Color(self.red * other, self.green * other, self.blue * other)

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the channels as a (red, green, blue) tuple."""
        return (self.red, self.green, self.blue)
