from unittest import TestCase, mock

from github import GithubException

from activity_readme.github_client import GitHubClient

from testutils import raw_event


def _fake_event(raw):
    return mock.Mock(raw_data=raw, id=raw.get("id"))


class GitHubClientTests(TestCase):
    def setUp(self):
        patcher = mock.patch("activity_readme.github_client.Github")
        self.github_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.github = self.github_cls.return_value

    def _set_feed(self, raws):
        user = self.github.get_user.return_value
        user.get_public_events.return_value.get_page.return_value = [_fake_event(raw) for raw in raws]

    def test_anonymous_without_token(self):
        GitHubClient()

        self.assertIsNone(self.github_cls.call_args.kwargs["auth"])
        self.assertEqual(self.github_cls.call_args.kwargs["per_page"], 100)

    def test_token_auth(self):
        GitHubClient(token="abc", api_url="https://ghe.example.com/api/v3", per_page=30)

        kwargs = self.github_cls.call_args.kwargs
        self.assertIsNotNone(kwargs["auth"])
        self.assertEqual(kwargs["base_url"], "https://ghe.example.com/api/v3")
        self.assertEqual(kwargs["per_page"], 30)

    def test_get_public_events_keeps_order_and_drops_unrenderable(self):
        self._set_feed(
            [
                raw_event("PullRequestEvent", "closed", "a/b", 3, merged=True),
                {"id": "2", "type": "PushEvent", "repo": {"name": "a/b"}, "payload": {}},
                raw_event("IssuesEvent", "opened", "c/d", 1),
                raw_event("IssueCommentEvent", "created", "e/f", 5),
            ]
        )

        events = GitHubClient().get_public_events("octocat")

        self.github.get_user.assert_called_once_with("octocat")
        self.github.get_user.return_value.get_public_events.return_value.get_page.assert_called_once_with(0)
        self.assertEqual([(e.type, e.repo_name, e.number) for e in events], [
            ("PullRequestEvent", "a/b", 3),
            ("IssuesEvent", "c/d", 1),
            ("IssueCommentEvent", "e/f", 5),
        ])
        self.assertTrue(events[0].merged)

    def test_invalid_records_are_skipped(self):
        self._set_feed([raw_event("IssuesEvent", "opened", "no-slash", 1), raw_event("IssuesEvent", "opened")])

        events = GitHubClient().get_public_events("octocat")

        self.assertEqual(len(events), 1)

    def test_fetch_failure_propagates(self):
        self.github.get_user.side_effect = GithubException(404, {"message": "Not Found"}, None)

        with self.assertRaises(GithubException):
            GitHubClient().get_public_events("ghost")

    def test_close(self):
        client = GitHubClient()
        client.close()

        self.github.close.assert_called_once_with()
