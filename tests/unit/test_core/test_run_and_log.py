# SPDX-License-Identifier: LGPL-3.0-or-later
import os
import subprocess
import unittest
from unittest.mock import Mock, patch

from fakes.fake_logger import FakeLogger

from fusionctl.core.exceptions import Fatal, ProcessError
from fusionctl.core.utils import U


class TestRunAndLog(unittest.TestCase):
    """Subprocess execution shared by every driver operation."""

    def setUp(self):
        self.logger = FakeLogger()

    @patch("fusionctl.core.utils.subprocess.run")
    def test_captures_stdout_and_stderr_separately(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout=b"out\n", stderr=b"warn\n")

        cp = U.run_and_log(self.logger, ["/bin/tool", "a", "b"])

        kwargs = mock_run.call_args[1]
        self.assertEqual(kwargs["stdout"], subprocess.PIPE)
        self.assertEqual(kwargs["stderr"], subprocess.PIPE)
        # raw bytes: no text mode, no newline translation
        self.assertNotIn("text", kwargs)
        self.assertNotIn("universal_newlines", kwargs)
        self.assertNotIn("encoding", kwargs)
        self.assertNotIn("timeout", kwargs)
        self.assertNotIn("shell", kwargs)
        self.assertEqual(cp.stdout, "out\n")
        self.assertEqual(cp.stderr, "warn\n")
        self.assertEqual(cp.returncode, 0)

    @patch("fusionctl.core.utils.subprocess.run")
    def test_logs_command_then_trimmed_output(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout=b"  hello \n", stderr=b"\n")

        U.run_and_log(self.logger, ["/bin/tool", "-T", "fusion", "list"])

        self.assertEqual(
            self.logger.records,
            [
                ("info", "Executing: /bin/tool ['-T', 'fusion', 'list']"),
                ("info", "stdout: hello"),
                ("info", "stderr: "),
            ],
        )

    @patch("fusionctl.core.utils.subprocess.run")
    def test_non_zero_exit_raises(self, mock_run):
        mock_run.return_value = Mock(returncode=3, stdout=b"partial", stderr=b"bad thing\n")

        with self.assertRaises(ProcessError) as ctx:
            U.run_and_log(self.logger, ["/bin/tool", "x"])

        e = ctx.exception
        self.assertEqual(e.returncode, 3)
        self.assertEqual(e.cmd, ["/bin/tool", "x"])
        self.assertEqual(e.stdout, "partial")
        self.assertEqual(e.stderr, "bad thing\n")
        self.assertIn("bad thing", e.msg)
        # output is logged even on failure
        self.assertIn("stderr: bad thing", self.logger.messages("info"))

    @patch("fusionctl.core.utils.subprocess.run")
    def test_undecodable_output_is_kept(self, mock_run):
        mock_run.return_value = Mock(returncode=1, stdout=b"caf\xe9\n", stderr=b"bad \xff byte\n")

        with self.assertRaises(ProcessError) as ctx:
            U.run_and_log(self.logger, ["/bin/tool"])

        e = ctx.exception
        self.assertEqual(e.stdout.encode("utf-8", "surrogateescape"), b"caf\xe9\n")
        self.assertEqual(e.stderr.encode("utf-8", "surrogateescape"), b"bad \xff byte\n")
        self.assertIn("bad \\udcff byte", e.msg)
        self.assertIn("stdout: caf\\udce9", self.logger.messages("info"))

    @patch("fusionctl.core.utils.subprocess.run")
    def test_launch_failure_raises(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "/bin/tool")

        with self.assertRaises(ProcessError) as ctx:
            U.run_and_log(self.logger, ["/bin/tool"])

        self.assertIsNone(ctx.exception.returncode)
        self.assertIsInstance(ctx.exception.cause, FileNotFoundError)
        self.assertTrue(self.logger.messages("error"))

    def test_real_process(self):
        cp = U.run_and_log(self.logger, ["sh", "-c", "echo out; echo err >&2"])

        self.assertEqual(cp.stdout, "out\n")
        self.assertEqual(cp.stderr, "err\n")

    def test_real_process_keeps_carriage_returns(self):
        cp = U.run_and_log(self.logger, ["sh", "-c", "printf 'a\\r\\nb\\r'"])

        self.assertEqual(cp.stdout, "a\r\nb\r")


class TestUtilsMisc(unittest.TestCase):
    def test_die_logs_and_raises(self):
        logger = FakeLogger()
        with self.assertRaises(Fatal) as ctx:
            U.die(logger, "nope", 7)
        self.assertEqual(ctx.exception.code, 7)
        self.assertEqual(logger.messages("error"), ["nope"])

    def test_to_text(self):
        self.assertEqual(U.to_text(None), "")
        self.assertEqual(U.to_text(b"abc"), "abc")
        self.assertEqual(U.to_text(5), "5")

    def test_to_text_matches_fsdecode(self):
        raw = b"/vms/caf\xe9.vmx"
        self.assertEqual(U.to_text(raw), os.fsdecode(raw))
        self.assertEqual(U.to_text(b"a\r\n"), "a\r\n")

    def test_printable_escapes_surrogates(self):
        self.assertEqual(U.printable("ok"), "ok")
        self.assertEqual(U.printable("caf\udce9"), "caf\\udce9")

    def test_pretty_cmd_quotes(self):
        self.assertEqual(U._pretty_cmd(["a b", "c"]), "'a b' c")

    def test_json_dump_sorted(self):
        self.assertEqual(U.json_dump({"b": 1, "a": 2}), '{\n  "a": 2,\n  "b": 1\n}')
