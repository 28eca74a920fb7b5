from __future__ import annotations

import argparse
import hashlib
import logging
from pathlib import Path
from typing import List

from .config import Settings, build_sink
from .crack import DEFAULT_BATCH, crack, iter_wordlist, load_ledger
from .digest import ALGORITHMS, hash_string, ntlm_hash
from .errors import DigestServiceError
from .md4 import md4_hex
from .md5 import md5_hex
from .service import submit
from .sinks import read_ledger

VECTORS = [
    b"",
    b"a",
    b"abc",
    b"message digest",
    b"abcdefghijklmnopqrstuvwxyz",
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    b"1234567890" * 8,
]

# RFC 1320 appendix A.5
MD4_RFC_VECTORS = {
    b"": "31d6cfe0d16ae931b73c59d7e0c089c0",
    b"a": "bde52cb31de33e46245e05fbdbd6fb24",
    b"abc": "a448017aaf21d8525fc10ae87aa6729d",
    b"message digest": "d9130a8164549fe818874806e1c7014b",
    b"abcdefghijklmnopqrstuvwxyz": "d79e1c308aa5bbcdeea8ed63df412da9",
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789": "043f8582f241db351ce627e153e7f0e4",
    b"1234567890" * 8: "e33b4ddc9c38f2199c3e7b164fcc0536",
}

NTLM_PASSWORD = "8846f7eaee8fb117ad06bdd830b7586c"


def _label(m: bytes) -> bytes:
    return m[:20] + (b"..." if len(m) > 20 else b"")


def _hashlib_md4():
    try:
        hashlib.new("md4")
    except ValueError:
        # OpenSSL 3 ships MD4 only in the legacy provider
        return None
    return lambda m: hashlib.new("md4", m).hexdigest()


def cmd_verify_core(_: argparse.Namespace) -> int:
    ok_all = True
    for m in VECTORS:
        ours = md5_hex(m)
        ref = hashlib.md5(m).hexdigest()
        status = "OK" if ours == ref else "FAIL"
        print(f"MD5('{_label(m)}') -> {status}")
        if ours != ref:
            print(f"  ours={ours}\n  ref ={ref}")
            ok_all = False

    ref_md4 = _hashlib_md4()
    if ref_md4 is None:
        print("MD4: hashlib has no md4, using RFC 1320 vectors only")
    for m, expected in MD4_RFC_VECTORS.items():
        ours = md4_hex(m)
        ref = ref_md4(m) if ref_md4 is not None else expected
        status = "OK" if ours == expected == ref else "FAIL"
        print(f"MD4('{_label(m)}') -> {status}")
        if status != "OK":
            print(f"  ours={ours}\n  ref ={ref}")
            ok_all = False

    nt = ntlm_hash("password")
    print(f"NTLM('password') -> {'OK' if nt == NTLM_PASSWORD else 'FAIL'}")
    ok_all = ok_all and nt == NTLM_PASSWORD

    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_hash(ns: argparse.Namespace) -> int:
    print(hash_string(ns.text, ns.algorithm))
    return 0


def cmd_submit(ns: argparse.Namespace) -> int:
    settings: Settings = ns.settings
    if ns.webhook:
        settings.webhook_url = ns.webhook
    if ns.ledger:
        settings.ledger = Path(ns.ledger)
        settings.webhook_url = None
    with build_sink(settings) as sink:
        try:
            digest = submit(ns.text, sink, ns.algorithm)
        except DigestServiceError as e:
            print(f"submit: {e.message}")
            return 1
    if not ns.quiet:
        print(f"submit: stored {ns.algorithm} digest via {type(sink).__name__}")
        print(digest)
    return 0


def cmd_show_ledger(ns: argparse.Namespace) -> int:
    path = ns.ledger or ns.settings.ledger
    print(read_ledger(path), end="")
    return 0


def cmd_crack(ns: argparse.Namespace) -> int:
    if ns.batch_size < 1:
        print("crack: --batch-size must be >= 1")
        return 1
    ledger = ns.ledger or ns.settings.ledger
    try:
        targets = load_ledger(ledger)
        found = crack(targets, iter_wordlist(ns.wordlist), ns.algorithm, batch_size=ns.batch_size)
    except OSError as e:
        print(f"crack: {e}")
        return 1
    for digest in targets:
        if digest in found:
            print(f"{digest}:{found[digest]}")
    if not ns.quiet:
        print(f"crack: recovered {len(found)}/{len(set(targets))}")
    return 0


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="pwdigest")
    p.add_argument("--verbose", "-v", action="store_true", help="输出调试日志")
    sub = p.add_subparsers(dest="cmd", required=True)
    algos = sorted(ALGORITHMS)

    s1 = sub.add_parser("verify-core", help="验证 MD5/MD4 实现是否与 hashlib 及 RFC 向量一致")
    s1.set_defaults(func=cmd_verify_core)

    s2 = sub.add_parser("hash", help="计算字符串的摘要（32 位小写十六进制）")
    s2.add_argument("text")
    s2.add_argument("--algorithm", "-a", choices=algos, default=None)
    s2.set_defaults(func=cmd_hash)

    s3 = sub.add_parser("submit", help="计算摘要并只把摘要写入 sink")
    s3.add_argument("text")
    s3.add_argument("--algorithm", "-a", choices=algos, default=None)
    dest = s3.add_mutually_exclusive_group()
    dest.add_argument("--ledger", type=str, default=None, help="哈希列表文件（或使用 PWDIGEST_LEDGER）")
    dest.add_argument("--webhook", type=str, default=None, help="webhook URL（或使用 PWDIGEST_WEBHOOK_URL）")
    s3.add_argument("--quiet", "-q", action="store_true")
    s3.set_defaults(func=cmd_submit)

    s4 = sub.add_parser("show-ledger", help="打印哈希列表")
    s4.add_argument("--ledger", type=str, default=None)
    s4.set_defaults(func=cmd_show_ledger)

    s5 = sub.add_parser("crack", help="用字典文件还原哈希列表中的口令")
    s5.add_argument("--ledger", type=str, default=None)
    s5.add_argument("--wordlist", "-w", type=str, required=True)
    s5.add_argument("--algorithm", "-a", choices=algos, default=None)
    s5.add_argument("--batch-size", type=int, default=DEFAULT_BATCH, help="每批并行计算的候选数")
    s5.add_argument("--quiet", "-q", action="store_true")
    s5.set_defaults(func=cmd_crack)

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        args.settings = Settings.from_env()
    except ValueError as e:
        print(f"pwdigest: {e}")
        return 1
    if getattr(args, "algorithm", "unset") is None:
        args.algorithm = args.settings.algorithm
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
