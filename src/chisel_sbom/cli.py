import argparse
import json
import logging
import sys
from pathlib import Path

from .builder import InvalidFileTypeError
from .converter import convert
from .jsonwall import ManifestError, open_manifest
from .settings import settings
from .spdx_json import document_hash, write_spdx_json


def cmd_convert(ns: argparse.Namespace) -> int:
    manifest = Path(ns.manifest)
    out = Path(ns.output) if ns.output else manifest.parent / settings.output_filename
    name = ns.name or settings.document_name
    try:
        with open_manifest(manifest) as stream:
            doc = convert(stream, name)
        write_spdx_json(doc, out, created=ns.created)
    except (ManifestError, InvalidFileTypeError, OSError) as e:
        print(e, file=sys.stderr)
        return 1
    print(f"SPDX document created at {out}")
    return 0


def cmd_hash(ns: argparse.Namespace) -> int:
    try:
        doc = json.loads(Path(ns.input).read_text())
    except (OSError, ValueError) as e:
        print(e, file=sys.stderr)
        return 1
    print(document_hash(doc))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chisel-sbom", description="Build SPDX documents from chisel manifests")
    p.add_argument("--log-level", default=None, help="Override CHISEL_SBOM_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd", required=True)

    convert_p = sub.add_parser(
        "convert",
        help="Convert a manifest.wall into SPDX JSON",
        description="Build an SPDX document from the chisel jsonwall manifest and save it to "
                    "<spdx-file-out>, or to manifest.spdx.json next to the manifest.",
    )
    convert_p.add_argument("manifest", help="Path to a zstd-compressed manifest.wall")
    convert_p.add_argument("output", nargs="?", help="Output SPDX JSON path")
    convert_p.add_argument("--name", help="SPDX document name")
    convert_p.add_argument("--created", help="Creation timestamp (default: now, UTC)")
    convert_p.set_defaults(func=cmd_convert)

    hash_p = sub.add_parser("hash", help="Compute canonical hash (sha256 hex) of an SPDX JSON document")
    hash_p.add_argument("--input", required=True)
    hash_p.set_defaults(func=cmd_hash)

    return p


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    logging.basicConfig(level=(ns.log_level or settings.log_level).upper())
    return ns.func(ns)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
