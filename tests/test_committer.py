import subprocess
from unittest import TestCase, mock

from activity_readme.committer import CommitError, GitCommitter
from activity_readme.config import CommitConfig


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class GitCommitterTests(TestCase):
    def setUp(self):
        patcher = mock.patch("activity_readme.committer.subprocess.run")
        self.run = patcher.start()
        self.addCleanup(patcher.stop)
        self.run.return_value = _completed()

    def _commands(self):
        return [c.args[0] for c in self.run.call_args_list]

    def test_commit_sequence(self):
        GitCommitter(CommitConfig(message="msg", user_name="bot", user_email="bot@example.com")).commit_file(
            "README.md"
        )

        self.assertEqual(
            self._commands(),
            [
                ["git", "config", "--global", "user.email", "bot@example.com"],
                ["git", "config", "--global", "user.name", "bot"],
                ["git", "add", "README.md"],
                ["git", "commit", "-m", "msg"],
                ["git", "push"],
            ],
        )

    def test_push_disabled(self):
        GitCommitter(CommitConfig(push=False)).commit_file("README.md", message="custom")

        commands = self._commands()
        self.assertEqual(commands[-1], ["git", "commit", "-m", "custom"])
        self.assertNotIn(["git", "push"], commands)

    def test_nothing_to_commit_is_success(self):
        def fake_run(command, **kwargs):
            if command[1] == "commit":
                return _completed(1, stdout="On branch main\nnothing to commit, working tree clean\n")
            return _completed()

        self.run.side_effect = fake_run

        GitCommitter().commit_file("README.md")

        self.assertEqual(self._commands()[-1], ["git", "push"])

    def test_failure_raises(self):
        def fake_run(command, **kwargs):
            if command[1] == "push":
                return _completed(128, stderr="fatal: could not read from remote repository")
            return _completed()

        self.run.side_effect = fake_run

        with self.assertRaises(CommitError) as ctx:
            GitCommitter().commit_file("README.md")

        self.assertEqual(ctx.exception.returncode, 128)
        self.assertEqual(ctx.exception.command, ["git", "push"])
        self.assertIn("could not read", ctx.exception.output)

    def test_runs_in_cwd(self):
        GitCommitter(cwd="/tmp/repo").commit_file("README.md")

        self.assertTrue(all(c.kwargs["cwd"] == "/tmp/repo" for c in self.run.call_args_list))
