from santa_hints.security import pwd_context

from conftest import ROSTER


def test_regenerate_command(app):
    result = app.test_cli_runner().invoke(args=["santa", "regenerate"])
    assert result.exit_code == 0

    lines = result.output.strip().splitlines()
    assert [line.split("\t")[0] for line in lines] == sorted(ROSTER)


def test_regenerate_command_rejects_tiny_roster(app):
    app.config["SANTA_ROSTER"] = ["Solo"]
    result = app.test_cli_runner().invoke(args=["santa", "regenerate"])
    assert result.exit_code != 0
    assert "at least 2" in result.output


def test_hash_password_command(app):
    result = app.test_cli_runner().invoke(args=["santa", "hash-password", "--password", "s3cret"])
    assert result.exit_code == 0

    hashed = result.output.strip()
    assert hashed.startswith("$argon2")
    assert pwd_context.verify("s3cret", hashed)
