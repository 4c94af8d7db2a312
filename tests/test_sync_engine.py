"""
End-to-end tests for push / pull orchestration with a scripted runner.
"""
import io
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from pathlib import Path

from syncpath.core.ssh_manager import ssh_args
from syncpath.core.sync_engine import run_sync
from syncpath.operations.transfer import SyncOptions, build_rsync_args

from fakes import ExpectedCall, FakeProcess, FakeRunner, RecordingDisplay, completed, reset_config

DRY_STDOUT = b"f+++++++++|foo.txt|12\nd+++++++++|dir/|0\nf+++++++++|dir/bar.txt|24\n"
DRY_STDERR = b"Total transferred file size: 36 bytes\n"


def ssh_call(cmd, status=0, error=None):
    return ExpectedCall("ssh", [*ssh_args(), "example", cmd], status=status, error=error)


class _EngineTest(unittest.TestCase):

    def setUp(self):
        reset_config()
        self.tmpdir = tempfile.TemporaryDirectory()
        self.home = Path(self.tmpdir.name).resolve() / "home"
        self.project = self.home / "projects" / "app"
        self.project.mkdir(parents=True)
        (self.project / "foo.txt").write_text("hello", encoding="utf-8")

    def tearDown(self):
        self.tmpdir.cleanup()

    def sync(self, runner, raw_path, options, display=None):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            run_sync("example", raw_path, options, runner=runner,
                     cwd=self.home / "projects", home=self.home, display=display)
        return out.getvalue(), err.getvalue()


class TestPush(_EngineTest):

    def test_dry_run_directory(self):
        options = SyncOptions(dry_run=True)
        args = build_rsync_args(options, True) + [f"{self.project}/", "example:~/projects/app/"]
        runner = FakeRunner([
            ssh_call('mkdir -p "$HOME/projects"'),
            ExpectedCall("rsync", args, output=completed(args, 0, DRY_STDOUT, DRY_STDERR)),
        ])

        out, _ = self.sync(runner, "app", options)

        runner.assert_done()
        self.assertEqual(out, "|-- dir\n|  +-- bar.txt\n+-- foo.txt\nTotal transferred file size: 36 bytes\n")

    def test_dry_run_single_file(self):
        options = SyncOptions(dry_run=True)
        local = self.project / "foo.txt"
        args = build_rsync_args(options, True) + [str(local), "example:~/projects/app/foo.txt"]
        runner = FakeRunner([
            ssh_call('mkdir -p "$HOME/projects/app"'),
            ExpectedCall("rsync", args, output=completed(args, 0, b"f+++++++++|foo.txt|5\n")),
        ])

        out, _ = self.sync(runner, "~/projects/app/foo.txt", options)

        runner.assert_done()
        self.assertEqual(out, "+-- foo.txt\n")

    def test_real_run(self):
        options = SyncOptions()
        args = build_rsync_args(options, False) + [f"{self.project}/", "example:~/projects/app/"]
        proc = FakeProcess(stdout="foo.txt\n", stderr="sent 100 bytes  received 20 bytes\n")
        runner = FakeRunner([
            ssh_call('mkdir -p "$HOME/projects"'),
            ExpectedCall("rsync", args, process=proc),
        ])

        out, _ = self.sync(runner, "./app/../app", options, display=RecordingDisplay())

        runner.assert_done()
        self.assertIn("  sent: 100 B", out)
        self.assertNotIn("total size", out)

    def test_mkdir_failure_aborts_before_transfer(self):
        runner = FakeRunner([ssh_call('mkdir -p "$HOME/projects"', status=1)])
        with self.assertRaisesRegex(RuntimeError, "failed to create remote directory"):
            self.sync(runner, "app", SyncOptions())
        runner.assert_done()

    def test_outside_home_reuses_absolute_path(self):
        options = SyncOptions(dry_run=True, no_perms=True)
        outside = Path(self.tmpdir.name).resolve() / "srv"
        outside.mkdir()
        args = build_rsync_args(options, True) + [f"{outside}/", f"example:{outside}/"]
        runner = FakeRunner([
            ssh_call(f"mkdir -p '{outside.parent}'"),
            ExpectedCall("rsync", args, output=completed(args, 0)),
        ])
        self.sync(runner, str(outside), options)
        runner.assert_done()


class TestPull(_EngineTest):

    def test_probe_says_file(self):
        options = SyncOptions(pull=True, dry_run=True)
        target = self.home / "notes" / "todo.md"
        args = build_rsync_args(options, True) + ["example:~/notes/todo.md", str(target)]
        runner = FakeRunner([
            ssh_call('test -f "$HOME/notes/todo.md"', status=0),
            ExpectedCall("rsync", args, output=completed(args, 0, b"f+++++++++|todo.md|3\n")),
        ])

        out, _ = self.sync(runner, "~/notes/todo.md", options)

        runner.assert_done()
        self.assertTrue((self.home / "notes").is_dir())
        self.assertEqual(out, "+-- todo.md\n")

    def test_probe_failure_defaults_to_directory(self):
        options = SyncOptions(pull=True, dry_run=True)
        target = self.home / "data" / "set"
        args = build_rsync_args(options, True) + ["example:~/data/set/", f"{target}/"]
        runner = FakeRunner([
            ssh_call('test -f "$HOME/data/set"', error=RuntimeError("failed to run ssh: not found")),
            ExpectedCall("rsync", args, output=completed(args, 0)),
        ])

        _, err = self.sync(runner, "~/data/set", options)

        runner.assert_done()
        self.assertIn("assuming a directory", err)
        self.assertTrue((self.home / "data").is_dir())

    def test_nonzero_probe_means_directory(self):
        options = SyncOptions(pull=True)
        args = build_rsync_args(options, False) + ["example:~/projects/app/", f"{self.project}/"]
        proc = FakeProcess(stderr="total size is 2,048  speedup is 1.00\n")
        runner = FakeRunner([
            ssh_call('test -f "$HOME/projects/app"', status=1),
            ExpectedCall("rsync", args, process=proc),
        ])

        out, _ = self.sync(runner, "app", options, display=RecordingDisplay())

        runner.assert_done()
        self.assertIn("  total size: 2.00 KB", out)

    def test_transfer_failure_is_fatal(self):
        options = SyncOptions(pull=True)
        args = build_rsync_args(options, False) + ["example:~/projects/app/", f"{self.project}/"]
        runner = FakeRunner([
            ssh_call('test -f "$HOME/projects/app"', status=1),
            ExpectedCall("rsync", args, process=FakeProcess(returncode=12)),
        ])
        with self.assertRaisesRegex(RuntimeError, "rsync failed"):
            self.sync(runner, "app", options, display=RecordingDisplay())


if __name__ == "__main__":
    unittest.main()
