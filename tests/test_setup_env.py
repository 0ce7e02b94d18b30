import unittest

from setup_env import generate_jwt_secret, render_env


class TestSetupEnv(unittest.TestCase):

    def test_replaces_placeholder_secret(self):
        example = 'DATABASE_URL="sqlite:///./data/blog.db"\nJWT_SECRET=""\nJWT_EXPIRY_HOURS=24\n'

        rendered = render_env(example, "s3cr3t")

        self.assertEqual(
            rendered.splitlines(),
            ['DATABASE_URL="sqlite:///./data/blog.db"', 'JWT_SECRET="s3cr3t"', "JWT_EXPIRY_HOURS=24"],
        )

    def test_appends_secret_when_missing(self):
        rendered = render_env("LOG_LEVEL=INFO", "s3cr3t")
        self.assertEqual(rendered, 'LOG_LEVEL=INFO\nJWT_SECRET="s3cr3t"\n')

    def test_generated_secrets_are_long_and_unique(self):
        first, second = generate_jwt_secret(), generate_jwt_secret()
        self.assertGreaterEqual(len(first), 43)
        self.assertNotEqual(first, second)


if __name__ == "__main__":
    unittest.main()
