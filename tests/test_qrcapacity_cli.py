import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from qrcapacity_cli import create_parser, main

MIN_UUID = "00000000-0000-4000-8000-000000000000"


def run(*argv: str) -> tuple[int, str, str]:
    stdout, stderr = io.StringIO(), io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        code = main(list(argv))
    return code, stdout.getvalue(), stderr.getvalue()


class TestCommandLine(unittest.TestCase):
    def test_version(self):
        self.assertEqual((0, "1\n", ""), run("version", "17"))
        self.assertEqual((0, "2\n", ""), run("version", "18", "--level", "L"))
        self.assertEqual((0, "3\n", ""), run("version", "24", "-l", "h"))
        self.assertEqual((0, "1\n", ""), run("version", "25", "--packed"))

    def test_version_exceeded(self):
        code, out, err = run("version", "4297")
        self.assertEqual(1, code)
        self.assertEqual("", out)
        self.assertIn("exceed", err)

    def test_cost(self):
        self.assertEqual((0, "74\n", ""), run("cost", "11", "1"))
        self.assertEqual((0, "17\n", ""), run("cost", "0", "27"))

    def test_table(self):
        code, out, _ = run("table", "--level", "H")
        self.assertEqual(0, code)
        self.assertTrue(out.startswith("H: 7 14 24 "))
        self.assertTrue(out.rstrip().endswith(" 1273"))

        code, out, _ = run("table")
        self.assertEqual(["L", "M", "Q", "H"], [line[0] for line in out.splitlines()])

    def test_encode_and_decode(self):
        code, out, _ = run("-q", "encode", MIN_UUID)
        self.assertEqual((0, "0" * 24 + "\n"), (code, out))

        code, out, _ = run("-q", "decode", "0" * 24)
        self.assertEqual((0, MIN_UUID + "\n"), (code, out))

    def test_encode_verbose_output(self):
        code, out, _ = run("encode", MIN_UUID.replace("-", ""))
        self.assertEqual(0, code)
        self.assertEqual(
            [
                "Base45: " + "0" * 24,
                "UUID:   " + MIN_UUID,
                "Bytes:  00000000000040008000000000000000",
                "QR:     version 2-L",
            ],
            out.splitlines(),
        )

    def test_decode_from_stdin(self):
        with mock.patch("sys.stdin", io.StringIO("0" * 24 + "\n")):
            code, out, _ = run("decode", "@-")
        self.assertEqual(0, code)
        self.assertIn("UUID:   " + MIN_UUID, out)

    def test_decode_leading_space(self):
        encoded = " 00" + "0" * 21
        code, out, _ = run("-q", "decode", encoded)
        self.assertEqual(0, code)
        self.assertEqual(encoded, run("-q", "encode", out.strip())[1].rstrip("\n"))

        with mock.patch("sys.stdin", io.StringIO(encoded + "\r\n")):
            self.assertEqual((0, out), run("-q", "decode", "2427 2427")[:2])

    def test_encode_from_stdin(self):
        raw = bytes.fromhex(MIN_UUID.replace("-", ""))
        with mock.patch("sys.stdin", io.TextIOWrapper(io.BytesIO(raw))):
            code, out, _ = run("-q", "encode", "2427 2427")
        self.assertEqual((0, "0" * 24 + "\n"), (code, out))

    def test_encode_from_stdin_wrong_length(self):
        with mock.patch("sys.stdin", io.TextIOWrapper(io.BytesIO(bytes(15)))):
            code, out, err = run("encode", "2427 2427")
        self.assertEqual(2, code)
        self.assertEqual("", out)
        self.assertIn("expected 16 got 15", err)

    def test_gen(self):
        code, out, _ = run("gen")
        self.assertEqual(0, code)
        self.assertTrue(out.startswith("Base45: "))
        self.assertIn("QR:     version 2-L", out)

    def test_invalid_input(self):
        code, _, err = run("encode", "not-a-uuid")
        self.assertEqual(2, code)
        self.assertIn("ERROR", err)

        code, _, err = run("decode", "a")
        self.assertEqual(2, code)
        self.assertIn("Base45", err)

    def test_argument_validation(self):
        parser = create_parser()
        with redirect_stderr(io.StringIO()):
            self.assertRaises(SystemExit, lambda: parser.parse_args(["cost", "11", "41"]))
            self.assertRaises(SystemExit, lambda: parser.parse_args(["version", "-1"]))
            self.assertRaises(SystemExit, lambda: parser.parse_args(["version", "10", "-l", "X"]))
            self.assertRaises(SystemExit, lambda: parser.parse_args([]))
