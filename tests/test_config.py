import pytest

from astrology.config import (
    DEFAULT_BASE_URL,
    AstrologySettings,
    load_settings_from_env,
    load_settings_from_yaml,
)
from astrology.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "PROKERALA_CLIENT_IDS",
        "PROKERALA_CLIENT_SECRETS",
        "PROKERALA_BASE_URL",
        "PROKERALA_TIMEOUT_SEC",
        "PROKERALA_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
def test_env_parallel_lists(clean_env):
    clean_env.setenv("PROKERALA_CLIENT_IDS", "id-1, id-2")
    clean_env.setenv("PROKERALA_CLIENT_SECRETS", "s-1,s-2")
    clean_env.setenv("PROKERALA_TIMEOUT_SEC", "10")

    settings = load_settings_from_env()

    assert settings.client_ids == ["id-1", "id-2"]
    assert settings.client_secrets == ["s-1", "s-2"]
    assert settings.timeout == 10.0
    assert settings.retries == 0
    assert settings.base_url == DEFAULT_BASE_URL


@pytest.mark.unit
def test_env_mapping_can_be_passed_explicitly():
    settings = load_settings_from_env(
        {
            "PROKERALA_CLIENT_IDS": "a",
            "PROKERALA_CLIENT_SECRETS": "b",
            "PROKERALA_BASE_URL": "https://sandbox.example.com",
            "PROKERALA_RETRIES": "2",
        }
    )
    assert settings.base_url == "https://sandbox.example.com"
    assert settings.retries == 2


@pytest.mark.unit
def test_env_mismatched_lengths_raise(clean_env):
    clean_env.setenv("PROKERALA_CLIENT_IDS", "id-1,id-2")
    clean_env.setenv("PROKERALA_CLIENT_SECRETS", "s-1")

    with pytest.raises(ConfigurationError) as e:
        load_settings_from_env()

    assert "must be equal" in str(e.value)


@pytest.mark.unit
def test_env_missing_credentials_raise(clean_env):
    with pytest.raises(ConfigurationError):
        load_settings_from_env()


@pytest.mark.unit
def test_env_invalid_timeout_raises(clean_env):
    clean_env.setenv("PROKERALA_CLIENT_IDS", "a")
    clean_env.setenv("PROKERALA_CLIENT_SECRETS", "b")
    clean_env.setenv("PROKERALA_TIMEOUT_SEC", "not-a-number")

    with pytest.raises(ConfigurationError) as e:
        load_settings_from_env()

    assert "PROKERALA_TIMEOUT_SEC" in str(e.value)


@pytest.mark.unit
def test_yaml_clients_list(tmp_path):
    path = tmp_path / "credentials.yaml"
    path.write_text(
        "clients:\n"
        "  - client_id: first\n"
        "    client_secret: one\n"
        "  - client_id: second\n"
        "    client_secret: two\n"
        "timeout: 7\n"
    )

    settings = load_settings_from_yaml(path)

    assert settings.client_ids == ["first", "second"]
    assert settings.client_secrets == ["one", "two"]
    assert settings.timeout == 7.0


@pytest.mark.unit
@pytest.mark.parametrize(
    "content",
    [
        "",
        "clients: []\n",
        "clients:\n  - client_id: only-id\n",
        "clients: nope\n",
        "- just\n- a list\n",
        "clients: [\n",
    ],
)
def test_yaml_invalid_content_raises(tmp_path, content):
    path = tmp_path / "credentials.yaml"
    path.write_text(content)

    with pytest.raises(ConfigurationError):
        load_settings_from_yaml(path)


@pytest.mark.unit
def test_yaml_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings_from_yaml(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_settings_repr_hides_secrets():
    settings = AstrologySettings(client_ids=["id"], client_secrets=["top-secret"])
    assert "top-secret" not in repr(settings)


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["-1", "0"])
def test_env_non_positive_timeout_raises(clean_env, raw):
    clean_env.setenv("PROKERALA_CLIENT_IDS", "a")
    clean_env.setenv("PROKERALA_CLIENT_SECRETS", "b")
    clean_env.setenv("PROKERALA_TIMEOUT_SEC", raw)

    with pytest.raises(ConfigurationError) as e:
        load_settings_from_env()

    assert "timeout" in str(e.value)


@pytest.mark.unit
def test_env_negative_retries_raises(clean_env):
    clean_env.setenv("PROKERALA_CLIENT_IDS", "a")
    clean_env.setenv("PROKERALA_CLIENT_SECRETS", "b")
    clean_env.setenv("PROKERALA_RETRIES", "-2")

    with pytest.raises(ConfigurationError):
        load_settings_from_env()


@pytest.mark.unit
def test_yaml_negative_timeout_raises(tmp_path):
    path = tmp_path / "credentials.yaml"
    path.write_text(
        "clients:\n"
        "  - client_id: first\n"
        "    client_secret: one\n"
        "timeout: -5\n"
    )

    with pytest.raises(ConfigurationError):
        load_settings_from_yaml(path)


@pytest.mark.unit
@pytest.mark.parametrize(
    "ids,secrets",
    [("a,,c", ",y,z"), ("a,b,", "x,y,z"), ("a,b", "x, ")],
)
def test_env_blank_list_entries_raise(clean_env, ids, secrets):
    clean_env.setenv("PROKERALA_CLIENT_IDS", ids)
    clean_env.setenv("PROKERALA_CLIENT_SECRETS", secrets)

    with pytest.raises(ConfigurationError) as e:
        load_settings_from_env()

    assert "empty entry" in str(e.value)
