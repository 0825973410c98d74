import pytest

from chisel_sbom.models import (
    Checksum,
    PackageInfo,
    PathInfo,
    SliceInfo,
    SPDXFile,
    SPDXPackage,
    SPDXRelationship,
)
from chisel_sbom.settings import settings

JSONWALL_REGULAR = """\
{"jsonwall":"1.0","schema":"1.0","count":3}
{"kind":"package","name":"test","version":"1.0","sha256":"sha256","arch":"amd64"}
{"kind":"path","path":"/test","mode":"0644","slices":["test_slice"],"sha256":"sha256","size":1024}
{"kind":"slice","name":"test_slice"}
"""

JSONWALL_MODIFIED = """\
{"jsonwall":"1.0","schema":"1.0","count":3}
{"kind":"package","name":"test","version":"1.0","sha256":"sha256"}
{"kind":"path","path":"/test","mode":"0644","slices":["test_slice"],"sha256":"sha256","final_sha256":"final_sha256","size":1024}
{"kind":"slice","name":"test_slice"}
"""


@pytest.fixture
def package():
    return PackageInfo(name="test", version="1.0", sha256="sha256")


@pytest.fixture
def slice_():
    return SliceInfo(name="test_slice")


@pytest.fixture
def regular_path():
    return PathInfo(path="/test", mode="0644", slices=["test_slice"], sha256="sha256")


@pytest.fixture
def expected_package():
    return SPDXPackage(
        name="test",
        spdx_id="Package-test",
        version="1.0",
        supplier={"supplier": settings.supplier, "supplier_type": "Person"},
        checksums=[Checksum(value="sha256")],
        comment="This package includes one or more slice(s); see Relationship information.",
    )


@pytest.fixture
def expected_slice():
    return SPDXPackage(
        name="test_slice",
        spdx_id="Slice-test_slice",
        comment="This slice is a sub-package of the package test; see Relationship information.",
    )


@pytest.fixture
def expected_regular_file():
    return SPDXFile(
        name="/test",
        spdx_id="File-/test",
        checksums=[Checksum(value="sha256")],
        comment="This file is included in the slice(s) test_slice; see Relationship information.",
    )


@pytest.fixture
def doc_describes_package():
    return SPDXRelationship(ref_a="DOCUMENT", ref_b="Package-test", relationship="DESCRIBES")


@pytest.fixture
def package_contains_slice():
    return SPDXRelationship(ref_a="Package-test", ref_b="Slice-test_slice", relationship="CONTAINS")


@pytest.fixture
def jsonwall_regular():
    return JSONWALL_REGULAR


@pytest.fixture
def jsonwall_modified():
    return JSONWALL_MODIFIED
