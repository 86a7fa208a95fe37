"""
Platform value object - chat platforms that can own a wallet binding.
"""

from enum import Enum


class Platform(str, Enum):
    """Supported chat platforms."""

    DISCORD = "discord"
    TELEGRAM = "telegram"

    @classmethod
    def parse(cls, value: "str | Platform") -> "Platform":
        """
        Parse platform tag (case-insensitive).

        Args:
            value: Platform tag such as "discord"

        Returns:
            Platform member

        Raises:
            ValueError: If tag is not a known platform
        """
        if isinstance(value, Platform):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = [p.value for p in cls]
            raise ValueError(f"Unsupported platform '{value}'. Must be one of: {allowed}")
