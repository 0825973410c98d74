import json

import zstandard as zstd

from chisel_sbom.cli import main
from chisel_sbom.spdx_json import document_hash

BAD_MANIFEST = """\
{"jsonwall":"1.0","schema":"1.0","count":2}
{"kind":"path","path":"/test","mode":"0644","slices":["test_slice"],"sha256":"sha256","link":"/file","inode":1}
{"kind":"slice","name":"test_slice"}
"""


def _write_wall(path, text):
    path.write_bytes(zstd.ZstdCompressor().compress(text.encode()))
    return path


def test_convert_to_default_location(tmp_path, capsys, jsonwall_regular):
    wall = _write_wall(tmp_path / "manifest.wall", jsonwall_regular)
    rc = main(["convert", str(wall), "--name", "test", "--created", "2024-01-01T00:00:00Z"])
    assert rc == 0
    out = tmp_path / "manifest.spdx.json"
    assert out.exists()
    assert f"SPDX document created at {out}" in capsys.readouterr().out
    doc = json.loads(out.read_text())
    assert doc["name"] == "test"
    assert [p["SPDXID"] for p in doc["packages"]] == ["SPDXRef-Package-test", "SPDXRef-Slice-test_slice"]
    assert doc["files"][0]["SPDXID"] == "SPDXRef-File-/test"


def test_convert_to_explicit_output(tmp_path, jsonwall_modified):
    wall = _write_wall(tmp_path / "manifest.wall", jsonwall_modified)
    target = tmp_path / "sbom" / "out.json"
    assert main(["convert", str(wall), str(target)]) == 0
    doc = json.loads(target.read_text())
    assert doc["relationships"][-1]["relationshipType"] == "FILE_MODIFIED"


def test_convert_is_reproducible(tmp_path, jsonwall_regular):
    wall = _write_wall(tmp_path / "manifest.wall", jsonwall_regular)
    a, b = tmp_path / "a.json", tmp_path / "b.json"
    ts = "2024-01-01T00:00:00Z"
    assert main(["convert", str(wall), str(a), "--created", ts]) == 0
    assert main(["convert", str(wall), str(b), "--created", ts]) == 0
    assert a.read_bytes() == b.read_bytes()


def test_convert_contradictory_manifest_fails(tmp_path, capsys):
    wall = _write_wall(tmp_path / "manifest.wall", BAD_MANIFEST)
    assert main(["convert", str(wall)]) == 1
    assert "/test" in capsys.readouterr().err
    assert not (tmp_path / "manifest.spdx.json").exists()


def test_convert_missing_manifest(tmp_path, capsys):
    assert main(["convert", str(tmp_path / "nope.wall")]) == 1
    assert capsys.readouterr().err


def test_hash(tmp_path, capsys):
    doc = {"spdxVersion": "SPDX-2.3", "name": "x"}
    p = tmp_path / "doc.json"
    p.write_text(json.dumps(doc))
    assert main(["hash", "--input", str(p)]) == 0
    assert capsys.readouterr().out.strip() == document_hash(doc)


def test_convert_unwritable_output_fails(tmp_path, capsys, jsonwall_regular):
    wall = _write_wall(tmp_path / "manifest.wall", jsonwall_regular)
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    assert main(["convert", str(wall), str(blocker / "out.json")]) == 1
    assert capsys.readouterr().err


def test_convert_invalid_utf8_manifest_fails(tmp_path, capsys):
    wall = tmp_path / "manifest.wall"
    raw = b'{"jsonwall":"1.0","schema":"1.0","count":1}\n{"kind":"slice","name":"a_\xff"}\n'
    wall.write_bytes(zstd.ZstdCompressor().compress(raw))
    assert main(["convert", str(wall)]) == 1
    assert "cannot decode" in capsys.readouterr().err


def test_hash_missing_input(tmp_path, capsys):
    assert main(["hash", "--input", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().err


def test_hash_invalid_json(tmp_path, capsys):
    p = tmp_path / "doc.json"
    p.write_text("{not json")
    assert main(["hash", "--input", str(p)]) == 1
    assert capsys.readouterr().err
