"""Tests for the dnsstamp command-line interface."""

from __future__ import annotations

import contextlib
import io
import json
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dnsstamp import __version__
from dnsstamp._cli import main


def _run(argv):
    """Run main(argv); return (exit_code, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    code = 0
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code
    return code, out.getvalue(), err.getvalue()


class TestParseCommand(unittest.TestCase):
    def test_parse_prints_json(self):
        code, out, _ = _run(["parse", "sdns://AgcAAAAAAAAAAAAABC9mb28"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), {
            "protocol": "DOH",
            "addr": "",
            "hash": "",
            "host_name": "",
            "path": "/foo",
            "props": {"dnssec": True, "nolog": True, "nofilter": True},
        })

    def test_parse_several(self):
        code, out, _ = _run(["parse", "sdns://gQNmb28", "sdns://BAcAAAAAAAAAA2Zvbw"])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(json.loads(lines[0])["protocol"], "AnonymizedRelay")
        self.assertEqual(json.loads(lines[1])["addr"], "foo")

    def test_parse_error_exit_code(self):
        code, _, err = _run(["parse", "https://example.com"])
        self.assertEqual(code, 2)
        self.assertIn("ERR_INVALID_SCHEME", err)


class TestEncodeCommand(unittest.TestCase):
    def test_encode_from_options(self):
        code, out, _ = _run(["encode", "dot", "--hash", "f0:0b:a4"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "sdns://AwcAAAAAAAAAAAPwC6QA")

    def test_encode_flags(self):
        code, out, _ = _run(["encode", "plain", "--no-dnssec", "--no-nolog", "--no-nofilter"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "sdns://BAAAAAAAAAAAAA")

    def test_encode_relay(self):
        code, out, _ = _run(["encode", "AnonymizedRelay", "--addr", "foo"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "sdns://gQNmb28")

    def test_option_not_in_protocol(self):
        code, _, err = _run(["encode", "plain", "--path", "/x"])
        self.assertEqual(code, 2)
        self.assertIn("ERR_DESCRIPTOR", err)

    def test_field_too_long(self):
        code, _, err = _run(["encode", "plain", "--addr", "a" * 300])
        self.assertEqual(code, 2)
        self.assertIn("ERR_FIELD_TOO_LONG", err)

    def test_encode_from_file(self):
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("- protocol: dnscrypt\n  pk: f00ba4\n- protocol: odoh\n  path: /foo\n")
        self.addCleanup(os.unlink, path)
        code, out, _ = _run(["encode", "--input", path])
        self.assertEqual(code, 0)
        self.assertEqual(out.split(), ["sdns://AQcAAAAAAAAAAAPwC6QA", "sdns://BQcAAAAAAAAAAAQvZm9v"])

    def test_input_rejects_field_options(self):
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write('{"protocol": "plain"}')
        self.addCleanup(os.unlink, path)
        for extra in (["--addr", "1.2.3.4"], ["--no-dnssec"], ["--provider-name", "x"]):
            with self.subTest(extra=extra):
                code, out, err = _run(["encode", "--input", path] + extra)
                self.assertEqual(code, 2)
                self.assertEqual(out, "")
                self.assertIn("cannot be combined with --input", err)

    def test_missing_file(self):
        code, _, _ = _run(["encode", "--input", "/nonexistent/stamps.yaml"])
        self.assertEqual(code, 2)

    def test_needs_protocol_or_input(self):
        code, _, _ = _run(["encode"])
        self.assertEqual(code, 2)


class TestMisc(unittest.TestCase):
    def test_version(self):
        code, out, _ = _run(["version"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "dnsstamp {}".format(__version__))

    def test_no_command(self):
        code, _, _ = _run([])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
