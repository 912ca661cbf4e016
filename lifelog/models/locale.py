"""
Supported UI/answer locales.
"""

from enum import Enum


class Locale(str, Enum):
    """Locales the analysis engine can answer in."""

    ZH = "zh"  # Chinese (Simplified)
    EN = "en"  # English
