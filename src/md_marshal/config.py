"""Centralized configuration for md-marshal."""

import os


class Config:
    """
    Markdown formatting configuration with environment variable overrides.

    The defaults produce the Slack Markdown layout the encoder documents.
    Values are read by the encoder at call time, so tests may patch them.
    """

    @staticmethod
    def _parse_suffix(raw: str) -> int:
        """Parse and validate the visible suffix length from string."""
        try:
            length = int(raw)
            if length < 0:
                raise ValueError(f"Suffix length must be >= 0, got {length}")
            return length
        except ValueError as e:
            raise ValueError(f"Invalid MD_VISIBLE_SUFFIX_LENGTH environment variable: {e}")

    @staticmethod
    def _parse_mask_char(raw: str) -> str:
        """Validate the mask character from string."""
        if len(raw) != 1:
            raise ValueError(
                f"Invalid MD_MASK_CHAR environment variable: "
                f"must be a single character, got {raw!r}"
            )
        return raw

    # ========================================================================
    # Field Annotations
    # ========================================================================
    METADATA_KEY: str = "markdown"  # dataclasses.field(metadata={...}) key
    DESCRIPTOR_CACHE_SIZE: int = 256  # dataclass types kept by describe_fields

    # ========================================================================
    # Redaction
    # ========================================================================
    MASK_CHAR: str = _parse_mask_char.__func__(os.getenv("MD_MASK_CHAR", "*"))
    VISIBLE_SUFFIX_LENGTH: int = _parse_suffix.__func__(
        os.getenv("MD_VISIBLE_SUFFIX_LENGTH", "4")
    )

    # ========================================================================
    # Layout
    # ========================================================================
    INDENT_UNIT: str = os.getenv("MD_INDENT_UNIT", "\t")
    NULL_LITERAL: str = "null"

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration consistency.

        Checks:
        - MASK_CHAR is exactly one character
        - VISIBLE_SUFFIX_LENGTH is >= 0
        - INDENT_UNIT is not empty

        Returns:
            True if validation passes

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if len(cls.MASK_CHAR) != 1:
            errors.append(f"MASK_CHAR must be a single character, got {cls.MASK_CHAR!r}")

        if cls.VISIBLE_SUFFIX_LENGTH < 0:
            errors.append(
                f"VISIBLE_SUFFIX_LENGTH must be >= 0, got {cls.VISIBLE_SUFFIX_LENGTH}"
            )

        if not cls.INDENT_UNIT:
            errors.append("INDENT_UNIT must not be empty")

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True
