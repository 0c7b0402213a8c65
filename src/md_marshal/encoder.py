"""Slack Markdown encoder for arbitrary structured values.

Values are traversed recursively, much like a JSON encoder would. Dataclass
field names are printed in bold, one ``- **name**: value`` line per field,
with nested dataclasses indented by one tab per level. ``None`` prints as
``null``. Types implementing ``Marshaler`` control their own output.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .config import Config
from .models import Marshaler, describe_fields


@dataclass(frozen=True)
class _MarshalOpts:
    """Traversal context threaded by value through recursive calls."""

    indent_level: int = 0
    obfuscate: bool = False

    def with_incremented_indent_level(self) -> "_MarshalOpts":
        return dataclasses.replace(self, indent_level=self.indent_level + 1)


def encode(value: Any) -> bytes:
    """
    Return the Slack Markdown encoding of value.

    Dispatch order:
    - Marshaler implementations: their own output, verbatim
    - None: ``null``
    - str: emitted as-is, redacted when the field is tagged ``obfuscate``
    - dataclass instances: one bold-labelled line per public field
    - anything else: its natural text form (``true``/``false`` for bools)

    Fields tagged ``-`` are left out of the output but are still encoded,
    so a failing Marshaler inside an omitted field still fails the call.

    Args:
        value: Any value to encode

    Returns:
        UTF-8 encoded Markdown

    Raises:
        Exception: Whatever a nested Marshaler raised, unwrapped

    Examples:
        >>> from md_marshal import FieldTag, markdown_field
        >>> @dataclass
        ... class User:
        ...     Name: str
        ...     Token: str = markdown_field(tag=FieldTag.OBFUSCATE)
        >>> encode(User(Name="Alice", Token="abcdef1234"))
        b'- **Name**: Alice\\n- **Token**: ******1234'
    """
    return _marshal(value, _MarshalOpts())


def encode_text(value: Any) -> str:
    """Same as encode, decoded to str."""
    return encode(value).decode("utf-8")


def obfuscate(text: str) -> str:
    """
    Mask all but the last few characters of text.

    Counts characters, not bytes. Text no longer than the visible suffix is
    returned unchanged.

    Examples:
        >>> obfuscate("abcdef1234")
        '******1234'
        >>> obfuscate("abcd")
        'abcd'
    """
    visible = Config.VISIBLE_SUFFIX_LENGTH
    length = len(text)

    if length <= visible:
        return text

    return Config.MASK_CHAR * (length - visible) + text[length - visible :]


def _marshal(value: Any, opts: _MarshalOpts) -> bytes:
    if isinstance(value, Marshaler) and not isinstance(value, type):
        return _marshal_custom(value)

    if value is None:
        return Config.NULL_LITERAL.encode("utf-8")

    if isinstance(value, str):
        return _marshal_str(value, opts)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _marshal_dataclass(value, opts)

    return _marshal_default(value)


def _marshal_custom(value: Marshaler) -> bytes:
    try:
        result = value.marshal_markdown()
    except Exception as e:
        logger.debug(f"Marshaler {type(value).__name__} failed: {e}")
        raise

    if isinstance(result, str):
        return result.encode("utf-8")
    if isinstance(result, (bytes, bytearray)):
        return bytes(result)

    raise TypeError(
        f"{type(value).__name__}.marshal_markdown() must return bytes or str, "
        f"got {type(result).__name__}"
    )


def _marshal_str(value: str, opts: _MarshalOpts) -> bytes:
    if opts.obfuscate:
        value = obfuscate(value)

    return value.encode("utf-8")


def _marshal_dataclass(value: Any, opts: _MarshalOpts) -> bytes:
    lines: list[bytes] = []

    for spec in describe_fields(type(value)):
        if not spec.is_public:
            continue

        inner_opts = opts.with_incremented_indent_level()
        if spec.obfuscated:
            inner_opts = dataclasses.replace(inner_opts, obfuscate=True)

        # Encoded before the omit check so errors in omitted fields surface
        marshaled = _marshal(getattr(value, spec.name), inner_opts)

        if spec.omitted:
            continue

        lines.append(b"- **" + spec.title.encode("utf-8") + b"**: " + marshaled)

    lines = _apply_indentation(lines, opts.indent_level)

    return b"\n".join(lines)


def _apply_indentation(lines: list[bytes], level: int) -> list[bytes]:
    prefix = Config.INDENT_UNIT.encode("utf-8") * level
    indented = [prefix + line for line in lines]

    if indented and level > 0:
        indented[0] = b"\n" + indented[0]  # nested blocks start on their own line

    return indented


def _marshal_default(value: Any) -> bytes:
    if isinstance(value, bool):
        return b"true" if value else b"false"

    return str(value).encode("utf-8")
