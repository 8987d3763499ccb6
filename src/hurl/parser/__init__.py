"""Parameter parsing for hurl.

Provides the two stages that turn command-line tokens into typed
parameters:

- :func:`split_parameter` -- apply the separator grammar to one token.
- :func:`classify` -- build the typed model, reading files and decoding
  JSON where the kind requires it.

:func:`parse_parameters` runs both stages over a whole argument list.

Example::

    from hurl.parser import parse_parameters

    params = parse_parameters(["X-API-TOKEN:abc123", "ids:=[1,2,3]"])
"""

from hurl.parser.classifier import classify, parse_parameter, parse_parameters
from hurl.parser.grammar import SEPARATORS, split_parameter

__all__ = [
    "SEPARATORS",
    "classify",
    "parse_parameter",
    "parse_parameters",
    "split_parameter",
]
