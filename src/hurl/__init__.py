"""hurl -- a command-line HTTP client.

Each positional parameter after the URL is a ``key<separator>value`` token
whose separator selects what the parameter becomes in the request::

    hurl example.com/users X-API-TOKEN:abc123 name=alice tags:='["a","b"]'

Headers, query parameters, body fields (literal, from a file, or raw JSON)
and multipart file uploads can all be expressed this way. The response is
printed with normalised, sorted headers and a pretty-printed JSON body.

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for parameters, requests, and responses.
    parser: Separator grammar and parameter classification.
    request: Folds parameters into a :class:`~hurl.models.RequestSpec`.
    client: httpx transport and response formatting.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
