"""Reader for chisel's jsonwall manifest database.

A jsonwall file is line oriented: a header object followed by one JSON object per
line, each tagged with a ``kind``::

    {"jsonwall":"1.0","schema":"1.0","count":3}
    {"kind":"package","name":"libc6","version":"2.35-0ubuntu3","sha256":"...","arch":"amd64"}
    {"kind":"path","path":"/etc/ld.so.conf","mode":"0644","slices":["libc6_config"],...}
    {"kind":"slice","name":"libc6_config"}

Manifests are shipped zstd-compressed (``manifest.wall``); :func:`open_manifest`
takes care of decompression.
"""
from __future__ import annotations

import contextlib
import io
import json
import logging
from pathlib import Path
from typing import Any, Iterator, TextIO, TypeVar

import zstandard as zstd
from pydantic import BaseModel, ValidationError

SUPPORTED_VERSION = "1.0"

M = TypeVar("M", bound=BaseModel)


class ManifestError(Exception):
    """The manifest could not be decompressed or decoded."""


class JsonwallDB:
    def __init__(self, header: dict[str, Any], records: list[dict[str, Any]]):
        self.header = header
        self.records = records

    @property
    def schema(self) -> str | None:
        return self.header.get("schema")

    def iterate(self, kind: str, model: type[M]) -> Iterator[M]:
        """Yield every record of ``kind`` in file order, validated as ``model``."""
        for rec in self.records:
            if rec.get("kind") != kind:
                continue
            try:
                yield model.model_validate(rec)
            except ValidationError as e:
                raise ManifestError(f"invalid {kind} record {rec!r}: {e}") from e


def read_db(stream: TextIO) -> JsonwallDB:
    first = stream.readline()
    if not first.strip():
        raise ManifestError("missing jsonwall header")
    try:
        header = json.loads(first)
    except json.JSONDecodeError as e:
        raise ManifestError(f"invalid jsonwall header: {e}") from e
    if not isinstance(header, dict) or "jsonwall" not in header:
        raise ManifestError("invalid jsonwall header: no jsonwall version")
    if header["jsonwall"] != SUPPORTED_VERSION:
        raise ManifestError(f"unsupported jsonwall version {header['jsonwall']!r}")

    records: list[dict[str, Any]] = []
    for lineno, line in enumerate(stream, start=2):
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            raise ManifestError(f"invalid jsonwall entry on line {lineno}: {e}") from e
        if not isinstance(obj, dict):
            raise ManifestError(f"invalid jsonwall entry on line {lineno}: not an object")
        records.append(obj)

    count = header.get("count")
    if count is not None and count != len(records):
        logging.debug("jsonwall header count %s does not match %d entries", count, len(records))
    return JsonwallDB(header, records)


@contextlib.contextmanager
def open_manifest(path: Path) -> Iterator[TextIO]:
    """Open a zstd-compressed manifest as a text stream."""
    with path.open("rb") as fh:
        reader = zstd.ZstdDecompressor().stream_reader(fh)
        with io.TextIOWrapper(reader, encoding="utf-8") as text:
            try:
                yield text
            except zstd.ZstdError as e:
                raise ManifestError(f"cannot decompress {path}: {e}") from e
            except UnicodeDecodeError as e:
                raise ManifestError(f"cannot decode {path}: {e}") from e
