"""Tests for the local config store."""

import json
import os
import platform

import pytest

import settings
from config.session import SnapConfig
from utils.storage import ConfigStore


class TestConfigStore:
    def test_missing_file_yields_defaults(self, store):
        config = store.load()

        assert not store.exists()
        assert config.access_token == ""
        assert config.api_url == settings.DEFAULT_API_URL
        assert config.client_id == settings.DEFAULT_CLIENT_ID
        assert config.auth_domain == settings.DEFAULT_AUTH_DOMAIN
        assert config.redirect_url == settings.DEFAULT_REDIRECT_URL

    def test_save_then_load(self, store):
        config = SnapConfig(access_token="abc", name="Ada", email="ada@example.com", api_url="https://dev.snapmaster.io")

        assert store.save(config) is True
        assert store.load() == config

    def test_file_uses_config_json_keys(self, store):
        store.save(SnapConfig(access_token="abc"))

        on_disk = json.loads(store.config_file.read_text())
        assert set(on_disk) == {"AccessToken", "Name", "Email", "APIURL", "ClientID", "AuthDomain", "RedirectURL"}
        assert on_disk["AccessToken"] == "abc"

    @pytest.mark.skipif(platform.system() == "Windows", reason="POSIX permissions")
    def test_file_is_private(self, store):
        store.save(SnapConfig(access_token="abc"))

        assert os.stat(store.config_file).st_mode & 0o777 == 0o600
        assert os.stat(store.config_file.parent).st_mode & 0o777 == 0o700

    def test_environment_overrides_file(self, store, monkeypatch):
        store.save(SnapConfig(api_url="https://www.snapmaster.io"))
        monkeypatch.setenv("SNAP_APIURL", "http://localhost:8080")

        assert store.load().api_url == "http://localhost:8080"

    def test_lowercase_keys_are_accepted(self, store):
        store.config_file.parent.mkdir(parents=True)
        store.config_file.write_text(json.dumps({"accesstoken": "abc", "apiurl": "https://dev.snapmaster.io"}))

        config = store.load()

        assert config.access_token == "abc"
        assert config.api_url == "https://dev.snapmaster.io"

    @pytest.mark.parametrize("contents", ["{not json", "[1, 2]", ""])
    def test_unreadable_file_falls_back_to_defaults(self, store, contents):
        store.config_file.parent.mkdir(parents=True)
        store.config_file.write_text(contents)

        assert store.load() == SnapConfig()

    def test_save_failure_returns_false(self, tmp_path):
        store = ConfigStore(str(tmp_path))

        assert store.save(SnapConfig()) is False

    def test_clear_session(self, store):
        store.save(SnapConfig(access_token="abc", name="Ada", email="ada@example.com", client_id="client-123"))

        assert store.clear_session() is True

        config = store.load()
        assert not config.is_logged_in
        assert config.name == ""
        assert config.client_id == "client-123"


class TestSnapConfig:
    def test_unknown_keys_are_ignored(self):
        config = SnapConfig.from_dict({"AccessToken": "abc", "Theme": "dark"})

        assert config.access_token == "abc"

    def test_set_by_key(self):
        config = SnapConfig()
        config.set("AuthDomain", "auth.example.com")

        assert config.auth_domain == "auth.example.com"

    def test_set_unknown_key(self):
        with pytest.raises(KeyError):
            SnapConfig().set("Theme", "dark")

    def test_with_session_leaves_original_untouched(self):
        config = SnapConfig(client_id="client-123")

        logged_in = config.with_session("abc", "Ada", "ada@example.com")

        assert logged_in.is_logged_in
        assert logged_in.client_id == "client-123"
        assert not config.is_logged_in


class TestEnvironmentOverrides:
    def test_override_is_not_written_back(self, store, monkeypatch):
        store.save(SnapConfig(access_token="abc", api_url="https://www.snapmaster.io"))
        monkeypatch.setenv("SNAP_APIURL", "http://localhost:8080")

        assert store.clear_session() is True

        on_disk = json.loads(store.config_file.read_text())
        assert on_disk["APIURL"] == "https://www.snapmaster.io"
        assert on_disk["AccessToken"] == ""
        assert store.load().api_url == "http://localhost:8080"

    def test_explicit_change_is_written_despite_override(self, store, monkeypatch):
        store.save(SnapConfig(api_url="https://www.snapmaster.io"))
        monkeypatch.setenv("SNAP_APIURL", "http://localhost:8080")

        config = store.load()
        config.api_url = "https://dev.snapmaster.io"
        store.save(config)

        assert store.load_file().api_url == "https://dev.snapmaster.io"

    def test_stored_values_are_returned_verbatim(self, store):
        store.save(SnapConfig(access_token="abc", name="~/x", email="ada@example.com"))

        assert store.load().name == "~/x"

    def test_override_values_are_not_expanded(self, store, monkeypatch):
        monkeypatch.setenv("SNAP_NAME", "~ada")

        assert store.load().name == "~ada"

    def test_config_file_that_is_not_utf8_falls_back_to_defaults(self, store):
        store.config_file.parent.mkdir(parents=True)
        store.config_file.write_bytes(b'{"Name": "\xff"}')

        assert store.load() == SnapConfig()
