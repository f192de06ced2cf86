import json
import hashlib

from pycnab.kernel.hash_utils import compute_canonical_json_sha256


def test_compute_canonical_json_sha256_pretty_printed(fixtures_dir, tmp_path):
    payload = json.loads((fixtures_dir / "bundle.json").read_text(encoding="utf-8"))

    path = tmp_path / "pretty.json"
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

    raw_hash = hashlib.sha256(path.read_bytes()).hexdigest()
    canonical_str = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    canonical_hash = hashlib.sha256(canonical_str.encode("utf-8")).hexdigest()

    assert raw_hash != canonical_hash
    assert compute_canonical_json_sha256(path) == canonical_hash


def test_compact_and_pretty_files_hash_identically(fixtures_dir, tmp_path):
    payload = json.loads((fixtures_dir / "credentialset.json").read_text(encoding="utf-8"))

    compact = tmp_path / "compact.json"
    compact.write_text(json.dumps(payload, separators=(",", ":")), encoding="utf-8")

    assert compute_canonical_json_sha256(compact) == compute_canonical_json_sha256(fixtures_dir / "credentialset.json")
