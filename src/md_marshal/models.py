"""
Field annotation and custom encoder contracts.

Composite values are dataclasses. Each field may carry a ``FieldTag`` in its
metadata under ``Config.METADATA_KEY``:

    @dataclass
    class Deployment:
        service: str
        api_key: str = markdown_field(tag=FieldTag.OBFUSCATE)
        internal_id: int = markdown_field(tag=FieldTag.OMIT, default=0)

Raw Go-style tag strings are accepted too:

    api_key: str = field(metadata={"markdown": "obfuscate"})

Types that need full control over their output implement ``Marshaler``.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Protocol, Union, runtime_checkable

from loguru import logger

from .config import Config


class MarshalerError(Exception):
    """Raised by a Marshaler that cannot produce its Markdown."""

    pass


class FieldTag(str, Enum):
    """Per-field annotation recognized by the encoder."""

    NONE = ""
    OMIT = "-"
    OBFUSCATE = "obfuscate"

    @classmethod
    def parse(cls, raw: Any) -> "FieldTag":
        """Coerce a metadata value into a FieldTag, unknown values become NONE."""
        if raw is None:
            return cls.NONE
        try:
            return cls(raw)
        except ValueError:
            logger.debug(f"Ignoring unknown markdown tag: {raw!r}")
            return cls.NONE


@runtime_checkable
class Marshaler(Protocol):
    """
    Implemented by types that marshal themselves into custom Markdown.

    The returned bytes are emitted verbatim; annotations, indentation and
    redaction are not applied. Raise (typically MarshalerError) on failure.
    """

    def marshal_markdown(self) -> bytes: ...


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one dataclass field as seen by the encoder."""

    name: str  # attribute name
    title: str  # bold label in the output line
    tag: FieldTag = FieldTag.NONE

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")

    @property
    def omitted(self) -> bool:
        return self.tag is FieldTag.OMIT

    @property
    def obfuscated(self) -> bool:
        return self.tag is FieldTag.OBFUSCATE


def markdown_field(
    *,
    tag: Union[FieldTag, str] = FieldTag.NONE,
    title: Optional[str] = None,
    metadata: Optional[dict[str, Any]] = None,
    **kwargs: Any,
) -> Any:
    """
    Declare a dataclass field with a markdown annotation.

    Args:
        tag: FieldTag or its string value ("", "-", "obfuscate")
        title: Display name for the field line (defaults to the attribute name)
        metadata: Extra metadata merged with the markdown entries
        **kwargs: Passed through to dataclasses.field (default, default_factory, ...)

    Returns:
        A dataclasses.Field

    Raises:
        ValueError: If tag is not a recognized annotation
    """
    merged = dict(metadata or {})
    merged[Config.METADATA_KEY] = FieldTag(tag)
    if title is not None:
        merged[f"{Config.METADATA_KEY}.title"] = title
    return dataclasses.field(metadata=merged, **kwargs)


@lru_cache(maxsize=Config.DESCRIPTOR_CACHE_SIZE)
def describe_fields(cls: type) -> tuple[FieldSpec, ...]:
    """
    Build the field descriptors for a dataclass type, in declaration order.

    Cached per type (bounded, least recently used types are evicted);
    metadata is read once and never written back.
    """
    specs = []
    for f in dataclasses.fields(cls):
        title = f.metadata.get(f"{Config.METADATA_KEY}.title", f.name)
        tag = FieldTag.parse(f.metadata.get(Config.METADATA_KEY))
        specs.append(FieldSpec(name=f.name, title=title, tag=tag))
    return tuple(specs)
