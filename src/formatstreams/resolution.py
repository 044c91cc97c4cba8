# topmark:header:start
#
#   project      : FormatStreams
#   file         : resolution.py
#   file_relpath : src/formatstreams/resolution.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Open resources as formatted streams.

`streamf` turns a path, an open binary stream, or a `Formatted` resource into
a `FormattedStream`:

1. untyped resources are classified (format and optional coding);
2. paths are opened in binary mode;
3. a coding transform (e.g. gzip) wraps the byte stream when a coding is set;
4. the registry resolves the streamer for the format;
5. the ``(streamer, format)`` constructor opens the stream.

Failures at any step propagate unchanged; there is no fallback to another
streamer. When `streamf` opened the file itself, the file is closed if a later
step fails, and is otherwise closed together with the returned stream (along
with any decoding wrapper around it).

Example:
    ```python
    from formatstreams import eachval, specify, streamf, with_stream

    with streamf("events.jsonl.gz") as s:
        for event in eachval(s):
            ...

    count = with_stream(lambda s: sum(1 for _ in eachval(s)),
                        specify("events.dat", "application/jsonl"))
    ```
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, Callable, TypeVar

from formatstreams.codings import default_codings
from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.formats import Formatted, default_classifier
from formatstreams.registry.streamers import default_registry

if TYPE_CHECKING:
    from formatstreams.codings import CodingRegistry
    from formatstreams.formats import Classifier, Resource
    from formatstreams.handlers import FormatHandler
    from formatstreams.registry.streamers import StreamerRegistry
    from formatstreams.streams.base import FormattedStream

logger: FormatStreamsLogger = get_logger(__name__)

R = TypeVar("R")


def classify(resource: Resource | Formatted, classifier: Classifier | None = None) -> Formatted:
    """Return *resource* tagged with its format, inferring it when needed.

    Already-tagged resources are returned unchanged; anything else goes to
    *classifier* (default: the suffix classifier), whose errors propagate.
    """
    if isinstance(resource, Formatted):
        return resource
    return (classifier or default_classifier()).classify(resource)


def dispatch(
    handler: FormatHandler,
    format_id: str,
    io: IO[bytes],
    *args: Any,
    registry: StreamerRegistry | None = None,
    **kwargs: Any,
) -> FormattedStream[Any]:
    """Open *io* as a *format_id* stream using *handler*'s constructor.

    Extra positional and keyword arguments are passed to the constructor.

    Raises:
        MissingConstructorError: If no constructor is bound to the pair.
    """
    reg = registry if registry is not None else default_registry()
    constructor = reg.constructor_for(handler, format_id)
    logger.debug("Dispatching %s to streamer %s", format_id, handler)
    return constructor(handler, format_id, io, *args, **kwargs)


def streamf(
    resource: Resource | Formatted,
    *args: Any,
    registry: StreamerRegistry | None = None,
    classifier: Classifier | None = None,
    codings: CodingRegistry | None = None,
    mode: str = "rb",
    **kwargs: Any,
) -> FormattedStream[Any]:
    """Open *resource* as a stream of formatted values.

    Args:
        resource (Resource | Formatted): Path, open binary stream, or a resource
            tagged with `formatstreams.specify`.
        *args (Any): Extra positional arguments for the streamer constructor.
        registry (StreamerRegistry | None): Registry to resolve streamers from;
            defaults to the process-wide registry.
        classifier (Classifier | None): Inference collaborator for untyped
            resources; defaults to the suffix classifier.
        codings (CodingRegistry | None): Coding transforms; defaults to the
            standard library compressors.
        mode (str): Mode used to open paths (binary).
        **kwargs (Any): Extra keyword arguments for the streamer constructor.

    Returns:
        FormattedStream[Any]: The opened stream; the caller owns it and must
            close it (or use it as a context manager).

    Raises:
        ClassificationError: If the resource cannot be classified.
        UnknownCodingError: If the coding has no registered transform.
        NoHandlerRegisteredError: If no streamer handles the format.
        AmbiguousHandlerError: If several streamers handle the format and no
            favorite picks one.
    """
    formatted = classify(resource, classifier)
    reg = registry if registry is not None else default_registry()

    owned = formatted.is_path
    raw: IO[bytes]
    if owned:
        raw = open(formatted.resource, mode)  # type: ignore[arg-type]  # noqa: SIM115
    else:
        raw = formatted.resource  # type: ignore[assignment]
    io = raw
    try:
        if formatted.coding is not None:
            transform = (codings or default_codings()).transform_for(formatted.coding)
            io = transform(raw)
            logger.trace("Decoding %s through %s", formatted.format, formatted.coding)
        handler = reg.resolve(formatted.format)
        stream = dispatch(handler, formatted.format, io, *args, registry=reg, **kwargs)
    except BaseException:
        if io is not raw:
            io.close()
        if owned:
            raw.close()
        raise

    if owned:
        # Attached resources close in reverse order: the decoder before its file.
        stream.attach(raw)
        if io is not raw:
            stream.attach(io)
    return stream


def with_stream(
    func: Callable[[FormattedStream[Any]], R],
    resource: Resource | Formatted,
    *args: Any,
    **kwargs: Any,
) -> R:
    """Open *resource*, call *func* with the stream, and close the stream.

    The stream is closed exactly once whether *func* returns or raises. An
    exception raised by *func* propagates unchanged; a failure while closing
    after it is logged rather than masking it.

    Args:
        func (Callable[[FormattedStream[Any]], R]): Callback using the stream.
        resource (Resource | Formatted): Resource accepted by `streamf`.
        *args (Any): Forwarded to `streamf`.
        **kwargs (Any): Forwarded to `streamf`.

    Returns:
        R: The value returned by *func*.
    """
    with streamf(resource, *args, **kwargs) as stream:
        return func(stream)
