import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from blog_cli.main import app

runner = CliRunner()

REPO_MIGRATIONS = Path(__file__).resolve().parents[1] / "migrations"


class TestDbCommands(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.url = f"sqlite:///{self.root / 'blog.db'}"

    def tearDown(self):
        self._tmp.cleanup()

    def test_migrate_applies_then_skips(self):
        args = ["db", "migrate", "--database-url", self.url, "--dir", str(REPO_MIGRATIONS)]

        first = runner.invoke(app, args)
        self.assertEqual(first.exit_code, 0, first.output)
        self.assertIn("applied  001_create_users.sql", first.output)
        self.assertIn("3 applied, 0 already up to date.", first.output)

        second = runner.invoke(app, args)
        self.assertEqual(second.exit_code, 0, second.output)
        self.assertIn("0 applied, 3 already up to date.", second.output)

    def test_migrate_failure_exits_non_zero(self):
        migrations = self.root / "migrations"
        migrations.mkdir()
        (migrations / "1_broken.sql").write_text("NOT SQL AT ALL;", encoding="utf-8")

        result = runner.invoke(app, ["db", "migrate", "--database-url", self.url, "--dir", str(migrations)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Migration failed", result.output)


class TestAuthCommands(unittest.TestCase):

    def test_issue_then_inspect(self):
        issued = runner.invoke(
            app, ["auth", "issue-token", "--user-id", "5", "--email", "eve@example.com", "-u", "eve"]
        )
        self.assertEqual(issued.exit_code, 0, issued.output)
        token = issued.output.splitlines()[0].strip()

        inspected = runner.invoke(app, ["auth", "inspect-token", token])
        self.assertEqual(inspected.exit_code, 0, inspected.output)
        self.assertIn("user_id:    5", inspected.output)
        self.assertIn("eve@example.com", inspected.output)

    def test_inspect_rejects_garbage(self):
        result = runner.invoke(app, ["auth", "inspect-token", "not-a-token"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Rejected: InvalidTokenError", result.output)


if __name__ == "__main__":
    unittest.main()
