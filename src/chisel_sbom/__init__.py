"""chisel_sbom package: convert chisel jsonwall manifests into SPDX SBOM documents.

The builder is independent of the manifest format so other record sources can feed
it the same PackageInfo / SliceInfo / PathInfo collections.
"""
from .builder import InvalidFileTypeError, build_spdx_document  # noqa: F401
from .converter import convert  # noqa: F401
from .jsonwall import ManifestError  # noqa: F401
