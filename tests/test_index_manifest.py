from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from asset_materializer.data.index_manifest import (
    INDEX_JSON_SCHEMA,
    IndexManifest,
    IndexObject,
    parse_index,
    save_index,
    validate_index_dict,
)


class IndexManifestTest(unittest.TestCase):
    def test_parse_reads_objects(self) -> None:
        manifest = parse_index(
            '{"objects": {"sprites/hero.png": {"hash": "deadbeef", "size": 4},'
            ' "sounds/step.ogg": {"hash": "ab12cd", "size": 120}}}'
        )

        self.assertEqual(len(manifest), 2)
        self.assertEqual(manifest.objects["sprites/hero.png"], IndexObject(hash="deadbeef", size=4))
        self.assertEqual(manifest.objects["sounds/step.ogg"].size, 120)

    def test_unknown_fields_are_ignored(self) -> None:
        manifest = parse_index(
            '{"objects": {"a.txt": {"hash": "00ff", "size": 1, "extra": true}}, "map_to_resources": false}'
        )

        self.assertEqual(manifest.objects["a.txt"], IndexObject(hash="00ff", size=1))

    def test_empty_objects_mapping(self) -> None:
        self.assertEqual(len(parse_index('{"objects": {}}')), 0)

    def test_manifest_is_read_only(self) -> None:
        manifest = parse_index('{"objects": {"a.txt": {"hash": "00ff", "size": 1}}}')

        with self.assertRaises(TypeError):
            manifest.objects["b.txt"] = IndexObject(hash="11ee", size=2)  # type: ignore[index]

    def test_malformed_json_raises_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_index('{"objects": ')

    def test_validation_rejects_bad_shapes(self) -> None:
        bad_payloads = [
            [],
            {},
            {"objects": []},
            {"objects": {"a.txt": "deadbeef"}},
            {"objects": {"a.txt": {"hash": "deadbeef"}}},
            {"objects": {"a.txt": {"hash": 12, "size": 1}}},
            {"objects": {"a.txt": {"hash": "deadbeef", "size": -1}}},
            {"objects": {"a.txt": {"hash": "deadbeef", "size": "4"}}},
            {"objects": {"a.txt": {"hash": "deadbeef", "size": True}}},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(ValueError):
                    validate_index_dict(payload)

    def test_validation_reports_schema_required_keys(self) -> None:
        entry_required = INDEX_JSON_SCHEMA["properties"]["objects"]["additionalProperties"]["required"]

        with self.assertRaises(ValueError) as ctx:
            validate_index_dict({"objects": {"a.txt": {}}})

        self.assertIn(str(sorted(entry_required)), str(ctx.exception))
        with self.assertRaisesRegex(ValueError, r"\['objects'\]"):
            validate_index_dict({"other": {}})

    def test_save_index_writes_parseable_json(self) -> None:
        manifest = IndexManifest(objects={"sprites/hero.png": IndexObject(hash="deadbeef", size=4)})

        with tempfile.TemporaryDirectory() as tmp:
            path = save_index(manifest, Path(tmp) / "indexes" / "game.json")

            payload = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(payload, {"objects": {"sprites/hero.png": {"hash": "deadbeef", "size": 4}}})
            self.assertEqual(parse_index(path.read_text(encoding="utf-8")), manifest)


if __name__ == "__main__":
    unittest.main()
