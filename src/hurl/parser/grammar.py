"""Separator grammar for ``key<separator>value`` parameter tokens.

Every positional parameter on the command line encodes its kind in the
separator between key and value. The separators overlap (``:`` is a prefix
of ``:=``, which is a prefix of ``:=@``), so a token is matched against the
separators longest first rather than with a regex alternation:

======  ==========================  =====================================
Sep     Kind                        Example
======  ==========================  =====================================
``:=@`` raw JSON field from file    ``meta:=@meta.json``
``:=``  raw JSON field              ``tags:=["a","b"]``
``=@``  data field from file        ``bio=@bio.txt``
``==``  query parameter             ``page==2``
``@``   file upload (form mode)     ``avatar@photo.png``
``:``   header                      ``X-API-TOKEN:abc123``
``=``   data field                  ``name=alice``
======  ==========================  =====================================

A separator only matches if the text before its first occurrence is a
valid key (non-empty, no ``:``, ``=`` or ``@``). Otherwise the next
separator in the table is tried, so ``X-Email:bob@example.com`` is a
header and ``url=http://example.com`` a data field.
"""

from __future__ import annotations

from hurl.exceptions import MalformedParameterError
from hurl.models import RESERVED_KEY_CHARS, ParameterKind

SEPARATORS: tuple[tuple[str, ParameterKind], ...] = (
    (":=@", ParameterKind.RAW_JSON_FIELD_FROM_FILE),
    (":=", ParameterKind.RAW_JSON_FIELD),
    ("=@", ParameterKind.DATA_FIELD_FROM_FILE),
    ("==", ParameterKind.QUERY),
    ("@", ParameterKind.FILE_UPLOAD),
    (":", ParameterKind.HEADER),
    ("=", ParameterKind.DATA_FIELD),
)
"""Separators in precedence order, longest first."""


def _is_valid_key(key: str) -> bool:
    return bool(key) and not any(char in key for char in RESERVED_KEY_CHARS)


def split_parameter(argument: str) -> tuple[ParameterKind, str, str]:
    """Classify *argument* and split it into key and raw value.

    Args:
        argument: One command-line token, e.g. ``"foo:=[1,2,3]"``.

    Returns:
        A ``(kind, key, raw_value)`` tuple. ``raw_value`` may be empty
        (``"X-Empty:"`` is a header with an empty value).

    Raises:
        MalformedParameterError: If no separator occurs in *argument*, or
            every separator that does occur leaves an empty or invalid key.

    Example::

        >>> split_parameter("foo==bar")
        (<ParameterKind.QUERY: 'query'>, 'foo', 'bar')
    """
    found_any = False
    for separator, kind in SEPARATORS:
        index = argument.find(separator)
        if index == -1:
            continue
        found_any = True
        key = argument[:index]
        if _is_valid_key(key):
            return kind, key, argument[index + len(separator):]

    if not found_any:
        raise MalformedParameterError(
            argument,
            "no separator found (expected one of "
            + ", ".join(f"'{sep}'" for sep, _ in SEPARATORS)
            + ")",
        )
    if argument[:1] in RESERVED_KEY_CHARS:
        raise MalformedParameterError(argument, "key is empty")
    raise MalformedParameterError(
        argument, "key must not contain ':', '=' or '@'"
    )
