import pytest

from hypecommit.config import DEFAULT_JIRA_HOST, DEFAULT_OPENAI_MODEL, ConfigError, Settings, load_settings


def test_defaults_from_empty_environment():
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.openai_model == DEFAULT_OPENAI_MODEL
    assert settings.jira_host == DEFAULT_JIRA_HOST


def test_values_are_read_and_stripped():
    settings = load_settings(
        environ={
            "OPENAI_API_KEY": " sk-test ",
            "OPENAI_MODEL": "gpt-4o-mini",
            "GITHUB_USERNAME": "octocat",
            "JIRA_HOST": "example.atlassian.net",
        }
    )
    assert settings.openai_api_key == "sk-test"
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.github_username == "octocat"
    assert settings.jira_host == "example.atlassian.net"


def test_github_token_falls_back_to_gh_token():
    assert load_settings(environ={"GH_TOKEN": "ghp_b"}).github_token == "ghp_b"
    assert load_settings(environ={"GITHUB_TOKEN": "ghp_a", "GH_TOKEN": "ghp_b"}).github_token == "ghp_a"


def test_blank_values_count_as_unset():
    settings = load_settings(environ={"OPENAI_MODEL": "  ", "OPENAI_API_KEY": ""})
    assert settings.openai_model == DEFAULT_OPENAI_MODEL
    assert settings.openai_api_key is None


def test_require_lists_every_missing_variable():
    settings = Settings(jira_username="dev")
    with pytest.raises(ConfigError) as excinfo:
        settings.require("openai_api_key", "jira_username", "jira_api_key")
    message = str(excinfo.value)
    assert "OPENAI_API_KEY" in message
    assert "JIRA_API_KEY" in message
    assert "JIRA_USERNAME" not in message


def test_require_passes_when_set():
    Settings(openai_api_key="sk").require("openai_api_key", "openai_model")


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "placeholder")
    monkeypatch.delenv("OPENAI_API_KEY")
    dotenv = tmp_path / ".env"
    dotenv.write_text("OPENAI_API_KEY=sk-from-dotenv\n")

    assert load_settings(dotenv_path=str(dotenv)).openai_api_key == "sk-from-dotenv"
