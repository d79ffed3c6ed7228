import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from cli.main import main
from courseids.config import Config, load_config


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_hash(self):
        code, out, _ = _run(["hash", "test-input"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["hash"], "55e8751841e6")

    def test_timestamp(self):
        code, out, _ = _run(["timestamp", "2025-09-01"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["canonical"], "2025-09-01T00:00:00.000Z")

    def test_entity_command(self):
        code, out, _ = _run([
            "item",
            "--title", "Entropy Laws",
            "--division-title", "Thermodynamics",
            "--course-name", "CHBE241",
            "--created-at", "2025-09-03T00:00:00Z",
        ])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["id"], "34950ca18cb3")

    def test_entity_missing_field(self):
        code, out, err = _run(["chat", "--user-id", "u1", "--created-at", "2025-09-01"])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertEqual(json.loads(err)["field"], "course_name")

    def test_code(self):
        code, out, _ = _run(["code", "--course-name", "CHBE241", "--created-at", "2025-09-01T00:00:00.000Z"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["code"], "FG0H78")

    def test_allocate_code(self):
        code, out, _ = _run([
            "allocate-code",
            "--course-name", "CHBE241",
            "--created-at", "2025-09-01T00:00:00.000Z",
            "--taken", "FG0H78",
        ])
        self.assertEqual(code, 0)
        res = json.loads(out)
        self.assertEqual(res["code"], "RND033")
        self.assertEqual(res["attempts"], 1)

    def test_allocate_code_zero_attempts_rejected(self):
        code, out, err = _run([
            "allocate-code",
            "--course-name", "CHBE241",
            "--created-at", "2025-09-01T00:00:00.000Z",
            "--max-attempts", "0",
        ])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("max_attempts", json.loads(err)["error"])

    def test_check_code(self):
        self.assertEqual(_run(["check-code", "FG0H78"])[0], 0)
        self.assertEqual(_run(["check-code", "fg0h78"])[0], 2)

    def test_batch(self):
        rec = {"kind": "course", "fields": {"course_name": "CHBE241", "created_at": "2025-09-01"}}
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "r.jsonl"
            p.write_text(json.dumps(rec) + "\n", encoding="utf-8")
            code, out, _ = _run(["batch", "--path", str(p)])
        self.assertEqual(code, 0)
        res = json.loads(out)
        self.assertEqual(res["derived"], 1)
        self.assertEqual(res["results"][0]["id"], "5710d8e97350")


class TestConfig(unittest.TestCase):
    def test_env_override(self):
        old = os.environ.get("COURSE_CODE_MAX_ATTEMPTS")
        os.environ["COURSE_CODE_MAX_ATTEMPTS"] = "4"
        try:
            cfg = load_config(reload=True)
            self.assertEqual(cfg.course_code_max_attempts, 4)
        finally:
            if old is None:
                os.environ.pop("COURSE_CODE_MAX_ATTEMPTS", None)
            else:
                os.environ["COURSE_CODE_MAX_ATTEMPTS"] = old
            load_config(reload=True)

    def test_validate(self):
        with self.assertRaises(RuntimeError):
            Config(course_code_max_attempts=0).validate()


if __name__ == "__main__":
    unittest.main()
