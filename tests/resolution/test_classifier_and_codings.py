# topmark:header:start
#
#   project      : FormatStreams
#   file         : test_classifier_and_codings.py
#   file_relpath : tests/resolution/test_classifier_and_codings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for suffix classification and the coding transform registry."""

from __future__ import annotations

import gzip
import io
import logging
from pathlib import Path

import pytest

from formatstreams.codings import CodingRegistry, default_codings
from formatstreams.constants import BZIP2_CODING, GZIP_CODING, JSONLINES_FORMAT, XZ_CODING
from formatstreams.errors import ClassificationError, UnknownCodingError
from formatstreams.formats import Classifier, Formatted, SuffixClassifier, default_classifier, specify
from tests.conftest import parametrize


@parametrize(
    "name, expected_format, expected_coding",
    [
        ("a.jsonl", JSONLINES_FORMAT, None),
        ("a.JSONL", JSONLINES_FORMAT, None),
        ("dir.v2/a.ndjson", JSONLINES_FORMAT, None),
        ("a.jsonl.gz", JSONLINES_FORMAT, GZIP_CODING),
        ("a.jsonl.bz2", JSONLINES_FORMAT, BZIP2_CODING),
        ("a.jsonl.xz", JSONLINES_FORMAT, XZ_CODING),
    ],
)
def test_default_classifier(name: str, expected_format: str, expected_coding: str | None) -> None:
    """Known suffixes map to format and coding identifiers."""
    formatted = default_classifier().classify(Path(name))
    assert formatted.format == expected_format
    assert formatted.coding == expected_coding
    assert formatted.is_path


@parametrize("name", ["a.txt", "a.gz", "noext", "a.gz.jsonl.zip"])
def test_unknown_suffix(name: str) -> None:
    """Names without a known format suffix cannot be classified."""
    with pytest.raises(ClassificationError):
        default_classifier().classify(name)


def test_longest_suffix_wins() -> None:
    """Compound suffixes are matched before their tail."""
    classifier = SuffixClassifier({".jsonl": "x/plain", ".d.jsonl": "x/compound"})
    assert classifier.classify("a.d.jsonl").format == "x/compound"
    assert classifier.classify("a.jsonl").format == "x/plain"


def test_coding_only_as_last_suffix() -> None:
    """A coding suffix in the middle of a name is not a coding."""
    classifier = SuffixClassifier({".gz.log": "x/log"}, {".gz": GZIP_CODING})
    formatted = classifier.classify("a.gz.log")
    assert formatted.format == "x/log"
    assert formatted.coding is None


def test_named_stream_classified_by_name(tmp_path: Path) -> None:
    """Open files are classified through their `name`."""
    path = tmp_path / "a.jsonl"
    path.write_bytes(b"")
    with path.open("rb") as fh:
        formatted = default_classifier().classify(fh)
    assert formatted.format == JSONLINES_FORMAT
    assert formatted.resource is fh
    assert not formatted.is_path


def test_register_suffix_normalizes_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    """Suffixes are normalized; replacing a mapping warns."""
    classifier = SuffixClassifier()
    classifier.register_suffix("LOG", "x/a")
    assert classifier.suffixes() == {".log": "x/a"}

    with caplog.at_level(logging.WARNING, logger="formatstreams"):
        classifier.register_suffix(".log", "x/b")
        classifier.register_coding_suffix("z", "x/z")
        classifier.register_coding_suffix("z", "x/zz")

    assert classifier.suffixes() == {".log": "x/b"}
    assert classifier.coding_suffixes() == {".z": "x/zz"}
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2


def test_suffix_classifier_is_a_classifier() -> None:
    """The bundled classifier satisfies the collaborator protocol."""
    assert isinstance(SuffixClassifier(), Classifier)


def test_specify_retags_formatted() -> None:
    """`specify` on an already tagged resource replaces the tags."""
    buffer = io.BytesIO()
    first = specify(buffer, "x/a", GZIP_CODING)
    second = specify(first, "x/b")  # type: ignore[arg-type]
    assert second == Formatted(buffer, "x/b", None)


def test_coding_registry() -> None:
    """Transforms are looked up by coding id; unknown ids raise."""
    codings = CodingRegistry()
    codings.register("x/identity", lambda io: io)
    assert codings.names() == ("x/identity",)

    buffer = io.BytesIO(b"raw")
    assert codings.transform_for("x/identity")(buffer) is buffer

    assert codings.unregister("x/identity") is True
    assert codings.unregister("x/identity") is False
    with pytest.raises(UnknownCodingError):
        codings.transform_for("x/identity")


def test_default_codings_decode_gzip() -> None:
    """The default gzip transform inflates data."""
    assert set(default_codings().names()) == {GZIP_CODING, BZIP2_CODING, XZ_CODING}
    transform = default_codings().transform_for(GZIP_CODING)
    assert transform(io.BytesIO(gzip.compress(b"hello"))).read() == b"hello"
