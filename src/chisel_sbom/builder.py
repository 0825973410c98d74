"""Build an SPDX document graph from normalized chisel manifest records.

The document is assembled in three passes, each appending to the graph:

  * packages: one ``Package-<name>`` node per package, described by the document;
  * slices: one ``Slice-<name>`` node per slice, contained by its owning package;
  * paths: one ``File-<path>`` node per path plus one relationship per owning slice.

Node identifiers are derived only from natural names so the same manifest always
yields the same identifiers in the same order.
"""
from __future__ import annotations

import enum
import logging
from typing import Iterable, NamedTuple

from .models import (
    DOCUMENT_ID,
    Checksum,
    CreationInfo,
    Creator,
    PackageInfo,
    PathInfo,
    RelationshipType,
    SliceInfo,
    SPDXDocument,
    SPDXFile,
    SPDXPackage,
    SPDXRelationship,
    Supplier,
)
from .settings import settings

# sha256 of the empty string, the declared digest of files generated by mutation scripts
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

SLICE_SEPARATOR = "_"

PACKAGE_COMMENT = "This package includes one or more slice(s); see Relationship information."
SLICE_COMMENT = "This slice is a sub-package of the package {package}; see Relationship information."


class InvalidFileTypeError(ValueError):
    """A path entry carries a combination of link, inode and final digest that
    does not describe any file type."""

    def __init__(self, message: str, *, path: str, inode: int = 0, link: str = "", final_sha256: str = ""):
        super().__init__(message)
        self.path = path
        self.inode = inode
        self.link = link
        self.final_sha256 = final_sha256


class FileType(enum.Enum):
    REGULAR = "regular"
    MODIFIED = "modified"
    SYMLINK = "symlink"
    HARD_LINK = "hard_link"


class FileClassification(NamedTuple):
    file_type: FileType
    digest: str
    relationship: RelationshipType
    reverse: bool  # file -> slice instead of slice -> file
    comment: str


_RELATIONSHIP_COMMENTS: dict[str, str] = {
    "CONTAINS": "File {path} is included in the slice {slice}.",
    "FILE_MODIFIED": "File {path} is mutated by the slice {slice}.",
}


def package_id(name: str) -> str:
    return f"Package-{name}"


def slice_id(name: str) -> str:
    return f"Slice-{name}"


def file_id(path: str) -> str:
    return f"File-{path}"


def owner_of(slice_name: str) -> str:
    """Return the package a slice belongs to (``libc6_libs`` -> ``libc6``)."""
    return slice_name.split(SLICE_SEPARATOR, 1)[0]


def classify_path(info: PathInfo) -> FileClassification:
    """Decide the file type of a path entry.

    ==========  =======  ======  ============
    File type   Inode    Link    FinalSHA256
    ==========  =======  ======  ============
    Regular     0        ""      ""
    Modified    0        ""      set
    Symlink     0        set     ""
    Hard link   > 0      ""      ""
    ==========  =======  ======  ============

    Every other combination raises :class:`InvalidFileTypeError`.
    """
    if info.inode > 0 and info.link:
        raise InvalidFileTypeError(
            f"cannot build file section: invalid file type: file {info.path} "
            f"simultaneously has inode {info.inode} and link {info.link}",
            path=info.path,
            inode=info.inode,
            link=info.link,
            final_sha256=info.final_sha256,
        )
    if info.final_sha256 and (info.inode > 0 or info.link):
        raise InvalidFileTypeError(
            f"cannot build file section: invalid link: link {info.path} has a final sha256",
            path=info.path,
            inode=info.inode,
            link=info.link,
            final_sha256=info.final_sha256,
        )

    slices = ", ".join(info.slices)
    if info.final_sha256:
        return FileClassification(
            FileType.MODIFIED,
            info.final_sha256,
            "FILE_MODIFIED",
            True,
            f"This file is mutated by the slice {slices}; see Relationship information.",
        )
    if info.inode > 0:
        return FileClassification(
            FileType.HARD_LINK,
            info.sha256,
            "CONTAINS",
            False,
            f"This file is within the hard link group {info.inode}; "
            "files in the same hard link group are alias of each other.",
        )
    if info.link:
        return FileClassification(
            FileType.SYMLINK,
            info.sha256,
            "CONTAINS",
            False,
            f"This file is a symlink to the file {info.link}.",
        )
    return FileClassification(
        FileType.REGULAR,
        info.sha256,
        "CONTAINS",
        False,
        f"This file is included in the slice(s) {slices}; see Relationship information.",
    )


def _doc_creators() -> list[Creator]:
    return [Creator(creator=settings.creator_tool, creator_type="Tool")]


def _package_supplier() -> Supplier:
    return Supplier(supplier=settings.supplier, supplier_type=settings.supplier_type)


def build_package_section(info: PackageInfo) -> tuple[SPDXPackage, SPDXRelationship]:
    pkg = SPDXPackage(
        name=info.name,
        spdx_id=package_id(info.name),
        version=info.version,
        supplier=_package_supplier(),
        checksums=[Checksum(value=info.sha256)],
        comment=PACKAGE_COMMENT,
    )
    rln = SPDXRelationship(ref_a=DOCUMENT_ID, ref_b=pkg.spdx_id, relationship="DESCRIBES")
    return pkg, rln


def build_slice_section(info: SliceInfo) -> tuple[SPDXPackage, SPDXRelationship]:
    owner = owner_of(info.name)
    pkg = SPDXPackage(
        name=info.name,
        spdx_id=slice_id(info.name),
        comment=SLICE_COMMENT.format(package=owner),
    )
    rln = SPDXRelationship(ref_a=package_id(owner), ref_b=pkg.spdx_id, relationship="CONTAINS")
    return pkg, rln


def build_path_section(info: PathInfo) -> tuple[SPDXFile, list[SPDXRelationship]]:
    cls = classify_path(info)
    file = SPDXFile(
        name=info.path,
        spdx_id=file_id(info.path),
        checksums=[Checksum(value=cls.digest)],
        comment=cls.comment,
    )
    rlns: list[SPDXRelationship] = []
    for s in info.slices:
        ref_a, ref_b = slice_id(s), file.spdx_id
        if cls.reverse:
            ref_a, ref_b = ref_b, ref_a
        rlns.append(SPDXRelationship(
            ref_a=ref_a,
            ref_b=ref_b,
            relationship=cls.relationship,
            comment=_RELATIONSHIP_COMMENTS[cls.relationship].format(path=info.path, slice=s),
        ))
    return file, rlns


def build_spdx_document(
    doc_name: str,
    slices: Iterable[SliceInfo],
    packages: Iterable[PackageInfo],
    paths: Iterable[PathInfo],
) -> SPDXDocument:
    """Build the SPDX graph for a manifest.

    Raises :class:`InvalidFileTypeError` on the first contradictory path entry;
    no partial document is returned.
    """
    doc_packages: list[SPDXPackage] = []
    doc_files: list[SPDXFile] = []
    relationships: list[SPDXRelationship] = []

    for p in packages:
        pkg, rln = build_package_section(p)
        doc_packages.append(pkg)
        relationships.append(rln)

    for s in slices:
        pkg, rln = build_slice_section(s)
        doc_packages.append(pkg)
        relationships.append(rln)

    for p in paths:
        file, rlns = build_path_section(p)
        doc_files.append(file)
        relationships.extend(rlns)

    logging.debug(
        "Built SPDX document %s: %d packages, %d files, %d relationships",
        doc_name, len(doc_packages), len(doc_files), len(relationships),
    )
    return SPDXDocument(
        name=doc_name,
        creation_info=CreationInfo(creators=_doc_creators()),
        packages=doc_packages,
        files=doc_files,
        relationships=relationships,
    )


__all__ = [
    "EMPTY_SHA256",
    "FileClassification",
    "FileType",
    "InvalidFileTypeError",
    "build_spdx_document",
    "classify_path",
    "owner_of",
]
