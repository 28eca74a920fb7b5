import unittest
from pathlib import Path

from pwdigest.config import Settings, build_sink
from pwdigest.sinks import LedgerSink, WebhookSink


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = Settings.from_env({})
        self.assertEqual(s.algorithm, "md5")
        self.assertEqual(s.ledger, Path("md5hashes.txt"))
        self.assertIsNone(s.webhook_url)
        self.assertEqual(s.webhook_timeout, 10.0)

    def test_overrides(self) -> None:
        s = Settings.from_env(
            {
                "PWDIGEST_ALGORITHM": "NTLM",
                "PWDIGEST_LEDGER": "/tmp/nt.txt",
                "PWDIGEST_WEBHOOK_URL": "https://hooks.example/x",
                "PWDIGEST_WEBHOOK_TIMEOUT": "2.5",
            }
        )
        self.assertEqual(s.algorithm, "ntlm")
        self.assertEqual(s.ledger, Path("/tmp/nt.txt"))
        self.assertEqual(s.webhook_url, "https://hooks.example/x")
        self.assertEqual(s.webhook_timeout, 2.5)

    def test_invalid_values(self) -> None:
        for env in (
            {"PWDIGEST_ALGORITHM": "sha256"},
            {"PWDIGEST_WEBHOOK_TIMEOUT": "soon"},
            {"PWDIGEST_WEBHOOK_TIMEOUT": "0"},
            {"PWDIGEST_WEBHOOK_TIMEOUT": "nan"},
            {"PWDIGEST_WEBHOOK_TIMEOUT": "inf"},
            {"PWDIGEST_WEBHOOK_TIMEOUT": "-inf"},
        ):
            with self.assertRaises(ValueError):
                Settings.from_env(env)

    def test_build_sink(self) -> None:
        self.assertIsInstance(build_sink(Settings()), LedgerSink)
        sink = build_sink(Settings(webhook_url="https://hooks.example/x", webhook_timeout=1.0))
        self.assertIsInstance(sink, WebhookSink)
        self.assertEqual(sink.timeout, 1.0)


if __name__ == "__main__":
    unittest.main()
