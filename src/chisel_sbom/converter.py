from __future__ import annotations

import logging
from typing import TextIO

from pydantic import BaseModel, Field

from .builder import build_spdx_document
from .jsonwall import JsonwallDB, ManifestError, read_db
from .models import (
    ManifestContent,
    ManifestPackage,
    ManifestPath,
    ManifestSlice,
    PackageInfo,
    PathInfo,
    SliceInfo,
    SPDXDocument,
)


class ManifestData(BaseModel):
    packages: list[ManifestPackage] = Field(default_factory=list)
    slices: list[ManifestSlice] = Field(default_factory=list)
    paths: list[ManifestPath] = Field(default_factory=list)
    contents: list[ManifestContent] = Field(default_factory=list)

    def process_packages(self) -> list[PackageInfo]:
        return [PackageInfo(name=p.name, version=p.version, sha256=p.digest) for p in self.packages]

    def process_slices(self) -> list[SliceInfo]:
        return [SliceInfo(name=s.name) for s in self.slices]

    def process_paths(self) -> list[PathInfo]:
        infos: list[PathInfo] = []
        for p in self.paths:
            # Directories carry no content
            if p.path.endswith("/"):
                continue
            infos.append(PathInfo(
                path=p.path,
                mode=p.mode,
                slices=list(p.slices),
                sha256=p.sha256,
                final_sha256=p.final_sha256,
                link=p.link,
                inode=p.inode,
            ))
        return infos


def manifest_from_db(db: JsonwallDB) -> ManifestData:
    return ManifestData(
        packages=list(db.iterate("package", ManifestPackage)),
        slices=list(db.iterate("slice", ManifestSlice)),
        paths=list(db.iterate("path", ManifestPath)),
        contents=list(db.iterate("content", ManifestContent)),
    )


def read_manifest(stream: TextIO) -> ManifestData:
    try:
        return manifest_from_db(read_db(stream))
    except ManifestError as e:
        raise ManifestError(f"cannot read manifest: {e}") from e


def convert(stream: TextIO, doc_name: str) -> SPDXDocument:
    """Convert a decompressed jsonwall manifest into an SPDX document."""
    data = read_manifest(stream)
    logging.info(
        "Read manifest: %d packages, %d slices, %d paths",
        len(data.packages), len(data.slices), len(data.paths),
    )
    return build_spdx_document(
        doc_name,
        data.process_slices(),
        data.process_packages(),
        data.process_paths(),
    )


__all__ = ["ManifestData", "convert", "manifest_from_db", "read_manifest"]
