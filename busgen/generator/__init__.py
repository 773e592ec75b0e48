"""D-Bus proxy code generator."""

from .complexity import COMPLEXITY_THRESHOLD as COMPLEXITY_THRESHOLD
from .complexity import complexity as complexity
from .complexity import is_complex as is_complex
from .introspect import ValidationError as ValidationError
from .introspect import parse as parse
from .introspect import parse_file as parse_file
from .proxy import render as render
from .proxy import render_module as render_module
from .rust import UnsupportedType as UnsupportedType
from .rust import project as project
from .rust import to_rust_type as to_rust_type
from .signature import SignatureError as SignatureError
from .signature import decode as decode
from .signature import decode_all as decode_all
from .signature import encode as encode
from .types import *
