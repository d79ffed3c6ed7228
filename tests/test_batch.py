import json
import tempfile
import unittest
from pathlib import Path

from courseids.errors import InvalidInput
from courseids.ids.batch import derive_ids_from_jsonl, derive_record_id


def _write_jsonl(td: str, lines) -> Path:
    p = Path(td) / "records.jsonl"
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return p


ITEM = {
    "kind": "item",
    "fields": {
        "title": "Entropy Laws",
        "division_title": "Thermodynamics",
        "course_name": "CHBE241",
        "created_at": "2025-09-03T00:00:00.000Z",
    },
}


class TestBatch(unittest.TestCase):
    def test_record(self):
        self.assertEqual(derive_record_id(ITEM), {"kind": "item", "id": "34950ca18cb3"})

    def test_jsonl_mixed(self):
        bad = {"kind": "chat", "fields": {"course_name": "CHBE241", "created_at": "2025-09-01"}}
        with tempfile.TemporaryDirectory() as td:
            p = _write_jsonl(td, [json.dumps(ITEM), "", json.dumps(bad), "{not json", json.dumps({"kind": "semester"})])
            out = list(derive_ids_from_jsonl(p))

        self.assertEqual(len(out), 4)
        self.assertEqual(out[0], {"line": 1, "kind": "item", "id": "34950ca18cb3"})
        self.assertEqual(out[1]["line"], 3)
        self.assertEqual(out[1]["field"], "user_id")
        self.assertEqual(out[2]["field"], "record")
        self.assertEqual(out[3]["field"], "kind")

    def test_fail_fast(self):
        bad = {"kind": "course", "fields": {"course_name": ""}}
        with tempfile.TemporaryDirectory() as td:
            p = _write_jsonl(td, [json.dumps(ITEM), json.dumps(bad)])
            with self.assertRaises(InvalidInput):
                list(derive_ids_from_jsonl(p, fail_fast=True))


if __name__ == "__main__":
    unittest.main()
