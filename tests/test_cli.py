import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from pwdigest.cli import main
from pwdigest.digest import md5_string


def run(argv, env=None):
    buf = io.StringIO()
    with mock.patch.dict(os.environ, env or {}, clear=True), redirect_stdout(buf):
        code = main(argv)
    return code, buf.getvalue()


class TestCli(unittest.TestCase):
    def test_hash(self) -> None:
        self.assertEqual(run(["hash", "abc"]), (0, "900150983cd24fb0d6963f7d28e17f72\n"))
        self.assertEqual(run(["hash", "password", "-a", "ntlm"]), (0, "8846f7eaee8fb117ad06bdd830b7586c\n"))

    def test_hash_uses_env_algorithm(self) -> None:
        code, out = run(["hash", "password"], {"PWDIGEST_ALGORITHM": "ntlm"})
        self.assertEqual(out.strip(), "8846f7eaee8fb117ad06bdd830b7586c")

    def test_bad_env(self) -> None:
        code, out = run(["hash", "x"], {"PWDIGEST_WEBHOOK_TIMEOUT": "-1"})
        self.assertEqual(code, 1)
        self.assertIn("PWDIGEST_WEBHOOK_TIMEOUT", out)

    def test_verify_core(self) -> None:
        code, out = run(["verify-core"])
        self.assertEqual(code, 0)
        self.assertIn("verify-core: PASS", out)

    def test_submit_and_show_ledger(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            ledger = str(Path(td) / "md5hashes.txt")
            code, out = run(["submit", "abc", "--ledger", ledger, "-q"])
            self.assertEqual((code, out), (0, ""))
            code, out = run(["submit", "abc"], {"PWDIGEST_LEDGER": ledger})
            self.assertEqual(code, 0)
            self.assertIn("LedgerSink", out)
            code, out = run(["show-ledger", "--ledger", ledger])
            self.assertEqual(out, "900150983cd24fb0d6963f7d28e17f72\n" * 2)

    def test_submit_empty_fails(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            ledger = Path(td) / "l.txt"
            code, out = run(["submit", "", "--ledger", str(ledger)])
            self.assertEqual(code, 1)
            self.assertIn("Please enter a value.", out)
            self.assertFalse(ledger.exists())

    def test_submit_webhook(self) -> None:
        with mock.patch("pwdigest.sinks.requests.Session") as session_cls:
            session_cls.return_value.post.return_value.status_code = 200
            code, _ = run(["submit", "abc", "--webhook", "https://hooks.example/x", "-q"])
        self.assertEqual(code, 0)
        session_cls.return_value.post.assert_called_once()
        session_cls.return_value.close.assert_called_once_with()
        _, kwargs = session_cls.return_value.post.call_args
        self.assertEqual(kwargs["json"], {"hash": "900150983cd24fb0d6963f7d28e17f72", "algorithm": "md5"})

    def test_crack(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            ledger = Path(td) / "md5hashes.txt"
            ledger.write_text(md5_string("trustno1") + "\n" + md5_string("zzz-unknown") + "\n", encoding="utf-8")
            words = Path(td) / "words.txt"
            words.write_text("abc\ntrustno1\n", encoding="utf-8")
            code, out = run(["crack", "--ledger", str(ledger), "-w", str(words)])
            self.assertEqual(code, 0)
            self.assertIn(f"{md5_string('trustno1')}:trustno1", out)
            self.assertIn("crack: recovered 1/2", out)

            code, out = run(["crack", "--ledger", str(Path(td) / "missing"), "-w", str(words)])
            self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
