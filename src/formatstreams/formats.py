# topmark:header:start
#
#   project      : FormatStreams
#   file         : formats.py
#   file_relpath : src/formatstreams/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classified resources and the format inference collaborator.

A `Formatted` value is a resource (path or open binary stream) tagged with a
format identifier and an optional coding identifier. Resources that are not
yet tagged are handed to a `Classifier`, which is an external collaborator:
FormatStreams only defines its shape.

The bundled `SuffixClassifier` is a plain lookup table from filename suffixes
to identifiers. It never inspects content; anything more elaborate belongs in
a dedicated classifier passed to `formatstreams.streamf`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePath
from typing import IO, TYPE_CHECKING, Final, Protocol, Union, runtime_checkable

from formatstreams.config.logging import FormatStreamsLogger, get_logger
from formatstreams.constants import BZIP2_CODING, GZIP_CODING, JSONLINES_FORMAT, XZ_CODING
from formatstreams.errors import ClassificationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: FormatStreamsLogger = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
Resource = Union[PathLike, IO[bytes]]

DEFAULT_FORMAT_SUFFIXES: Final[dict[str, str]] = {
    ".jsonl": JSONLINES_FORMAT,
    ".ndjson": JSONLINES_FORMAT,
}

DEFAULT_CODING_SUFFIXES: Final[dict[str, str]] = {
    ".gz": GZIP_CODING,
    ".bz2": BZIP2_CODING,
    ".xz": XZ_CODING,
}


def is_path(resource: object) -> bool:
    """Return True if *resource* denotes a filesystem path rather than an open stream."""
    return isinstance(resource, (str, os.PathLike))


@dataclass(frozen=True)
class Formatted:
    """A resource tagged with its format and optional coding.

    Attributes:
        resource (Resource): Filesystem path or open binary stream.
        format (str): Format identifier (media-type style, e.g. ``"application/jsonl"``).
        coding (str | None): Coding identifier applied on top of the format
            (e.g. ``"application/gzip"``), or ``None`` for raw data.
    """

    resource: Resource
    format: str
    coding: str | None = None

    @property
    def is_path(self) -> bool:
        """Whether the tagged resource is a path that still has to be opened."""
        return is_path(self.resource)


def specify(resource: Resource, format: str, coding: str | None = None) -> Formatted:
    """Tag *resource* with an explicit format (and coding), bypassing inference."""
    if isinstance(resource, Formatted):
        resource = resource.resource
    return Formatted(resource=resource, format=format, coding=coding)


@runtime_checkable
class Classifier(Protocol):
    """Protocol for format/coding inference collaborators.

    Implementations inspect a raw resource and return it tagged, or raise to
    signal that the resource cannot be classified. `streamf` propagates the
    raised exception unchanged.
    """

    def classify(self, resource: Resource) -> Formatted:
        """Return *resource* tagged with its format and optional coding."""
        ...


class SuffixClassifier:
    """Classifier that maps filename suffixes to format and coding identifiers.

    The coding suffix, if any, must be the last one (``data.jsonl.gz``). The
    remaining suffixes are matched longest first, so ``.d.jsonl`` may be
    registered separately from ``.jsonl``. Open streams are classified by their
    ``name`` attribute when they have one.

    Args:
        formats (Mapping[str, str] | None): Initial suffix -> format table.
        codings (Mapping[str, str] | None): Initial suffix -> coding table.
    """

    def __init__(
        self,
        formats: Mapping[str, str] | None = None,
        codings: Mapping[str, str] | None = None,
    ) -> None:
        self._formats: dict[str, str] = {}
        self._codings: dict[str, str] = {}
        for suffix, format_id in (formats or {}).items():
            self.register_suffix(suffix, format_id)
        for suffix, coding_id in (codings or {}).items():
            self.register_coding_suffix(suffix, coding_id)

    @staticmethod
    def _normalize(suffix: str) -> str:
        suffix = suffix.strip().lower()
        if not suffix.startswith("."):
            suffix = "." + suffix
        return suffix

    def register_suffix(self, suffix: str, format_id: str) -> None:
        """Map a filename suffix (e.g. ``".jsonl"``) to a format identifier."""
        key = self._normalize(suffix)
        previous = self._formats.get(key)
        if previous is not None and previous != format_id:
            logger.warning("replacing format for suffix %s: %s -> %s", key, previous, format_id)
        self._formats[key] = format_id

    def register_coding_suffix(self, suffix: str, coding_id: str) -> None:
        """Map a filename suffix (e.g. ``".gz"``) to a coding identifier."""
        key = self._normalize(suffix)
        previous = self._codings.get(key)
        if previous is not None and previous != coding_id:
            logger.warning("replacing coding for suffix %s: %s -> %s", key, previous, coding_id)
        self._codings[key] = coding_id

    def suffixes(self) -> dict[str, str]:
        """Return a copy of the suffix -> format table."""
        return dict(self._formats)

    def coding_suffixes(self) -> dict[str, str]:
        """Return a copy of the suffix -> coding table."""
        return dict(self._codings)

    def classify(self, resource: Resource) -> Formatted:
        """Tag *resource* using its filename suffixes.

        Raises:
            ClassificationError: If the resource has no usable name or no
                suffix matches a known format.
        """
        if isinstance(resource, Formatted):
            return resource
        if is_path(resource):
            name = os.fspath(resource)
        else:
            name = getattr(resource, "name", None)
            if not isinstance(name, str):
                raise ClassificationError(resource, "stream has no file name")

        suffixes: list[str] = [s.lower() for s in PurePath(name).suffixes]
        coding: str | None = None
        if suffixes and suffixes[-1] in self._codings:
            coding = self._codings[suffixes.pop()]

        for start in range(len(suffixes)):
            candidate = "".join(suffixes[start:])
            format_id = self._formats.get(candidate)
            if format_id is not None:
                logger.trace("classified %s as %s (coding: %s)", name, format_id, coding)
                return Formatted(resource=resource, format=format_id, coding=coding)

        raise ClassificationError(resource, f"no format registered for suffix of {name!r}")


@lru_cache(maxsize=1)
def default_classifier() -> SuffixClassifier:
    """Return (and cache) the process-wide suffix classifier."""
    return SuffixClassifier(DEFAULT_FORMAT_SUFFIXES, DEFAULT_CODING_SUFFIXES)
