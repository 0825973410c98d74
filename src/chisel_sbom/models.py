from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

SPDX_VERSION = "SPDX-2.3"
SPDX_DATA_LICENSE = "CC0-1.0"
DOCUMENT_ID = "DOCUMENT"
NOASSERTION = "NOASSERTION"

RelationshipType = Literal["DESCRIBES", "CONTAINS", "FILE_MODIFIED"]


# --- Manifest records (one per jsonwall line) ---

class ManifestPackage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["package"] = "package"
    name: str
    version: str = ""
    digest: str = Field("", alias="sha256")
    arch: str = ""


class ManifestSlice(BaseModel):
    kind: Literal["slice"] = "slice"
    name: str


class ManifestPath(BaseModel):
    kind: Literal["path"] = "path"
    path: str
    mode: str = ""
    slices: list[str] = Field(default_factory=list)
    sha256: str = ""
    final_sha256: str = ""
    size: int = 0
    link: str = ""
    inode: NonNegativeInt = 0


class ManifestContent(BaseModel):
    kind: Literal["content"] = "content"
    slice: str
    path: str


# --- Builder inputs ---

class PackageInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str = ""
    sha256: str = ""


class SliceInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class PathInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    mode: str = ""
    slices: list[str] = Field(default_factory=list)
    sha256: str = ""
    final_sha256: str = ""  # set when a mutation script rewrote the file after install
    link: str = ""
    inode: NonNegativeInt = 0  # hard link group, 0 when the file is not hard linked


# --- SPDX document graph ---

class Checksum(BaseModel):
    model_config = ConfigDict(frozen=True)

    algorithm: Literal["SHA256"] = "SHA256"
    value: str


class Creator(BaseModel):
    model_config = ConfigDict(frozen=True)

    creator: str
    creator_type: Literal["Tool", "Organization", "Person"] = "Tool"


class Supplier(BaseModel):
    model_config = ConfigDict(frozen=True)

    supplier: str
    supplier_type: Literal["Organization", "Person"] = "Person"


class CreationInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    creators: list[Creator] = Field(default_factory=list)


class SPDXPackage(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    spdx_id: str
    version: str = ""
    supplier: Supplier | None = None
    download_location: str = NOASSERTION
    files_analyzed: bool = False
    checksums: list[Checksum] = Field(default_factory=list)
    comment: str = ""


class SPDXFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    spdx_id: str
    checksums: list[Checksum] = Field(default_factory=list)
    copyright_text: str = NOASSERTION
    comment: str = ""


class SPDXRelationship(BaseModel):
    model_config = ConfigDict(frozen=True)

    ref_a: str
    ref_b: str
    relationship: RelationshipType
    comment: str = ""


class SPDXDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    spdx_version: str = SPDX_VERSION
    data_license: str = SPDX_DATA_LICENSE
    spdx_id: str = DOCUMENT_ID
    name: str
    creation_info: CreationInfo
    packages: list[SPDXPackage] = Field(default_factory=list)
    files: list[SPDXFile] = Field(default_factory=list)
    relationships: list[SPDXRelationship] = Field(default_factory=list)
