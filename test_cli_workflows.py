from __future__ import annotations

import io
import os
import subprocess
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from xorstripe.cli import cmd_encode, cmd_recover, cmd_repair
from xorstripe.codec import encode_file
from xorstripe.constants import PARITY
from xorstripe.errors import UnrecoverableLoss


class CLIIntegrationTests(unittest.TestCase):
    def run_cli(self, args, *, expect: int | None = 0, stdin: str = ""):
        cmd = [sys.executable, "-m", "xorstripe.cli"] + list(args)
        env = os.environ.copy()
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        proc = subprocess.run(
            cmd,
            input=stdin,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=env,
        )
        if expect is not None and proc.returncode != expect:
            raise AssertionError(
                f"CLI exited {proc.returncode}, expected {expect}\nCommand: {' '.join(cmd)}\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"
            )
        return proc

    def test_encode_report(self):
        proc = self.run_cli(["encode", "HELLO WORLD", "--chunks", "3"])
        self.assertIn("Chunk 0: 'HELL'", proc.stdout)
        self.assertIn("Chunk 2: 'RLD.'", proc.stdout)
        self.assertIn("Parity check: OK", proc.stdout)

    def test_encode_reads_stdin(self):
        proc = self.run_cli(["encode", "-n", "2"], stdin="abcd")
        self.assertIn("Original Data: 'abcd' (4 bytes)", proc.stdout)

    def test_encode_defaults_to_demo_text(self):
        proc = self.run_cli(["encode"])
        self.assertIn("'HELLO WORLD' (11 bytes)", proc.stdout)

    def test_encode_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "payload.bin"
            path.write_bytes(os.urandom(2048))
            proc = self.run_cli(["encode", "--file", str(path), "--chunks", "4"])
            self.assertIn("(2048 bytes)", proc.stdout)
            self.assertIn("Total storage: 5 chunks (original 4 + 1 parity)", proc.stdout)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            proc = self.run_cli(["encode", "--file", str(Path(tmp) / "nope")], expect=2)
            self.assertIn("Error:", proc.stderr)

    def test_invalid_chunk_count(self):
        proc = self.run_cli(["encode", "HELLO", "--chunks", "1"], expect=2)
        self.assertIn("Error: number of chunks must be at least 2", proc.stderr)

    def test_recover_all_and_selected(self):
        proc = self.run_cli(["recover", "HELLO WORLD"])
        self.assertEqual(3, proc.stdout.count("SUCCESS"))
        self.assertIn("Recovered 3 chunk(s): OK", proc.stdout)
        proc = self.run_cli(["recover", "HELLO WORLD", "--lose", "2"])
        self.assertIn("Recovered Chunk 2: 'RLD.'", proc.stdout)

    def test_recover_out_of_range(self):
        proc = self.run_cli(["recover", "HELLO WORLD", "--lose", "-1"], expect=2)
        self.assertIn("out of bounds", proc.stderr)

    def test_repair_single_and_double_loss(self):
        proc = self.run_cli(["repair", "HELLO WORLD", "--lose", "parity"])
        self.assertIn("Decoded data matches input: yes", proc.stdout)
        proc = self.run_cli(["repair", "HELLO WORLD", "--lose", "0", "--lose", "1"], expect=2)
        self.assertIn("single XOR parity recovers at most one", proc.stderr)

    def test_repair_bad_member(self):
        proc = self.run_cli(["repair", "HELLO WORLD", "--lose", "first"], expect=2)
        self.assertIn("expected a chunk index", proc.stderr)

    def test_demo_session(self):
        proc = self.run_cli(["demo"], stdin="HELLO WORLD\n3\n1\n9\nq\n")
        self.assertIn("Testing Recovery for All Chunks", proc.stdout)
        self.assertIn("Invalid choice. Please enter a number between 0 and 2.", proc.stdout)
        self.assertEqual(4, proc.stdout.count("SUCCESS"))
        self.assertIn("Key Takeaways", proc.stdout)
        self.assertIn("1 parity chunk for 3 data chunks", proc.stdout)

    def test_demo_out_of_range_count_uses_default(self):
        proc = self.run_cli(["demo"], stdin="\n42\n")
        self.assertIn("original 3 + 1 parity", proc.stdout)


class CommandFunctionTests(unittest.TestCase):
    def test_cmd_functions(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            self.assertTrue(cmd_encode(b"A", 2))
            self.assertTrue(cmd_recover(b"A", 2, lose=[0]))
            self.assertTrue(cmd_repair(b"A", 2, [PARITY]))
        self.assertIn("Recovered Chunk 0: 'A'", buf.getvalue())

    def test_file_input_goes_through_encode_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "payload.txt"
            path.write_bytes(b"HELLO WORLD")
            buf = io.StringIO()
            with mock.patch("xorstripe.cli.encode_file", wraps=encode_file) as spy, redirect_stdout(buf):
                self.assertTrue(cmd_encode(None, 3, path=str(path)))
                self.assertTrue(cmd_repair(None, 3, [1], path=str(path)))
            self.assertEqual(2, spy.call_count)
            spy.assert_called_with(str(path), 3)
            self.assertIn("Original Data: 'HELLO WORLD' (11 bytes)", buf.getvalue())
            self.assertIn("Decoded data matches input: yes", buf.getvalue())

    def test_cmd_repair_two_losses(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(UnrecoverableLoss):
                cmd_repair(b"HELLO WORLD", 3, [0, PARITY])


if __name__ == "__main__":
    unittest.main()
