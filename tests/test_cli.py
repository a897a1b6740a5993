import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path
from unittest.mock import patch

from jsonmend.cli import main

_CLEAN_ENV = {k: v for k, v in os.environ.items() if not k.startswith("JSONMEND_")}


@patch.dict(os.environ, _CLEAN_ENV, clear=True)
class CliTest(unittest.TestCase):
    def _run(self, argv: list[str]) -> tuple[int, str, str]:
        out, err = StringIO(), StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_fix_file_to_stdout_pretty(self):
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "in.txt"
            src.write_text("{'a': [1, 2,", encoding="utf-8")
            code, out, _ = self._run(["fix", str(src)])
        self.assertEqual(code, 0)
        self.assertEqual(out, '{\n  "a": [\n    1,\n    2\n  ]\n}\n')

    def test_fix_reads_stdin_and_writes_compact(self):
        with patch("sys.stdin", StringIO('{name: "x" "n": 007')):
            code, out, _ = self._run(["fix", "-", "--compact"])
        self.assertEqual(code, 0)
        self.assertEqual(out, '{"name":"x","n":7}\n')

    def test_fix_empty_input_prints_nothing(self):
        with patch("sys.stdin", StringIO("   \n")):
            code, out, _ = self._run(["fix"])
        self.assertEqual(code, 0)
        self.assertEqual(out, "")

    def test_fix_writes_output_file(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            src = root / "in.txt"
            dst = root / "out" / "fixed.json"
            src.write_text("a: tru", encoding="utf-8")
            code, _, err = self._run(
                ["fix", str(src), "--output", str(dst), "--raw", "--wrap-bare-members", "--keyword-mode", "prefix"]
            )
            self.assertEqual(code, 0)
            self.assertEqual(dst.read_text(encoding="utf-8"), '{"a":true}\n')
            self.assertIn("Wrote repaired JSON", err)

    def test_fix_returns_1_when_output_is_invalid(self):
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "in.txt"
            src.write_text('{"a":"x\\d"}', encoding="utf-8")
            code, out, err = self._run(["fix", str(src), "--no-string-escapes"])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("not valid JSON", err)

    def test_env_options_are_used_as_defaults(self):
        with patch.dict(os.environ, {"JSONMEND_WRAP_BARE_MEMBERS": "1"}):
            with patch("sys.stdin", StringIO("a: 1")):
                code, out, _ = self._run(["fix", "--compact"])
        self.assertEqual(code, 0)
        self.assertEqual(out, '{"a":1}\n')

    def test_fix_lines(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            src = root / "in.jsonl"
            dst = root / "out.jsonl"
            src.write_text("{a: 1}\n[2,\n", encoding="utf-8")
            code, _, err = self._run(["fix-lines", str(src), str(dst)])
            self.assertEqual(code, 0)
            self.assertEqual(dst.read_text(encoding="utf-8"), '{"a":1}\n[2]\n')
            self.assertIn("Repair Run Summary", err)

    def test_fix_missing_input_reports_error(self):
        with tempfile.TemporaryDirectory() as td:
            code, out, err = self._run(["fix", str(Path(td) / "missing.txt")])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("error: Input file does not exist", err)

    def test_fix_lines_missing_input_reports_error(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            code, _, err = self._run(["fix-lines", str(root / "missing.jsonl"), str(root / "out.jsonl")])
        self.assertEqual(code, 2)
        self.assertIn("error: Input JSONL not found", err)

    def test_fix_keeps_huge_numbers_as_standard_json(self):
        with patch("sys.stdin", StringIO("[1e999, " + "7" * 5000 + "]")):
            code, out, _ = self._run(["fix", "--compact"])
        self.assertEqual(code, 0)
        self.assertEqual(out, "[1E+999," + "7" * 5000 + "]\n")

    def test_no_command_prints_help(self):
        code, out, _ = self._run([])
        self.assertEqual(code, 2)
        self.assertIn("usage", out)


if __name__ == "__main__":
    unittest.main()
