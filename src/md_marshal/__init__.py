"""md-marshal - Slack Markdown encoding of structured values."""

__version__ = "0.1.0"

from .config import Config
from .encoder import encode, encode_text, obfuscate
from .models import (
    FieldSpec,
    FieldTag,
    Marshaler,
    MarshalerError,
    describe_fields,
    markdown_field,
)

__all__ = [
    "Config",
    "encode",
    "encode_text",
    "obfuscate",
    "FieldSpec",
    "FieldTag",
    "Marshaler",
    "MarshalerError",
    "describe_fields",
    "markdown_field",
    "__version__",
]
