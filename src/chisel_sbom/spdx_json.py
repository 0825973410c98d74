import hashlib
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import Checksum, SPDXDocument, SPDXFile, SPDXPackage, SPDXRelationship
from .settings import settings

SPDX_REF_PREFIX = "SPDXRef-"


def spdx_ref(element_id: str) -> str:
    return f"{SPDX_REF_PREFIX}{element_id}"


def _checksums(checksums: List[Checksum]) -> List[Dict[str, str]]:
    return [{"algorithm": c.algorithm, "checksumValue": c.value} for c in checksums]


def _package(pkg: SPDXPackage) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "name": pkg.name,
        "SPDXID": spdx_ref(pkg.spdx_id),
    }
    if pkg.version:
        out["versionInfo"] = pkg.version
    if pkg.supplier:
        out["supplier"] = f"{pkg.supplier.supplier_type}: {pkg.supplier.supplier}"
    out["downloadLocation"] = pkg.download_location
    out["filesAnalyzed"] = pkg.files_analyzed
    if pkg.checksums:
        out["checksums"] = _checksums(pkg.checksums)
    if pkg.comment:
        out["comment"] = pkg.comment
    return out


def _file(f: SPDXFile) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "fileName": f.name,
        "SPDXID": spdx_ref(f.spdx_id),
        "checksums": _checksums(f.checksums),
        "copyrightText": f.copyright_text,
    }
    if f.comment:
        out["comment"] = f.comment
    return out


def _relationship(r: SPDXRelationship) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "spdxElementId": spdx_ref(r.ref_a),
        "relatedSpdxElement": spdx_ref(r.ref_b),
        "relationshipType": r.relationship,
    }
    if r.comment:
        out["comment"] = r.comment
    return out


def _graph(doc: SPDXDocument) -> Dict[str, Any]:
    return {
        "spdxVersion": doc.spdx_version,
        "dataLicense": doc.data_license,
        "SPDXID": spdx_ref(doc.spdx_id),
        "name": doc.name,
        "creationInfo": {
            "creators": [f"{c.creator_type}: {c.creator}" for c in doc.creation_info.creators],
        },
        "packages": [_package(p) for p in doc.packages],
        "files": [_file(f) for f in doc.files],
        "relationships": [_relationship(r) for r in doc.relationships],
    }


def canonicalize(doc: Dict[str, Any]) -> str:
    return json.dumps(doc, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def document_hash(doc: Dict[str, Any]) -> str:
    return hashlib.sha256(canonicalize(doc).encode("utf-8")).hexdigest()


def default_namespace(doc: SPDXDocument) -> str:
    """Namespace URI derived from the graph content, stable across rebuilds."""
    digest = document_hash(_graph(doc))
    return f"{settings.namespace_base}/{doc.name}-{uuid.uuid5(uuid.NAMESPACE_URL, digest)}"


def to_spdx_json(doc: SPDXDocument,
                 created: Optional[str] = None,
                 namespace: Optional[str] = None) -> Dict[str, Any]:
    """Render the document graph as an SPDX 2.3 JSON object."""
    out = _graph(doc)
    out["documentNamespace"] = namespace or default_namespace(doc)
    out["creationInfo"]["created"] = created or datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return out


def write_spdx_json(doc: SPDXDocument, path: Path,
                    created: Optional[str] = None,
                    namespace: Optional[str] = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_spdx_json(doc, created, namespace), indent=2) + "\n")
    return path


__all__ = ["canonicalize", "document_hash", "spdx_ref", "to_spdx_json", "write_spdx_json"]
