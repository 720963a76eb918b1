import configparser
import json
import logging
import os
import shlex
from typing import List
from sshman.hostlib import Profile
from sshman.sshlib import SSH


log = logging.getLogger(__name__)

APP_NAMESPACE = ".ssh_manager"
STORAGE_FILENAME = "config.json"
SETTINGS_FILENAME = "settings.ini"


def default_config_dir():
    return os.path.join(os.path.expanduser("~"), APP_NAMESPACE)


class ProfileStore:
    def __init__(self, path):
        self.path = path

    def load(self) -> List[Profile]:
        if not os.path.exists(self.path):
            log.debug("no storage file at %s, starting empty", self.path)
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise StorageError(f"Failed to read config file {self.path}: {exc}") from exc
        except ValueError as exc:
            raise StorageError(f"Failed to parse JSON in {self.path}: {exc}") from exc
        if not isinstance(data, list):
            raise StorageError(
                f"Failed to parse JSON in {self.path}: expected a list of connections"
            )
        try:
            profiles = [Profile.from_dict(item) for item in data]
        except ValueError as exc:
            raise StorageError(f"Failed to parse JSON in {self.path}: {exc}") from exc
        log.debug("loaded %d connection(s) from %s", len(profiles), self.path)
        return profiles

    def save(self, profiles: List[Profile]):
        parent = os.path.dirname(self.path)
        try:
            if parent != "":
                os.makedirs(parent, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Failed to create config directory {parent}: {exc}"
            ) from exc
        data = json.dumps(
            [p.to_dict() for p in profiles], indent=2, ensure_ascii=False
        )
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(data)
        except OSError as exc:
            raise StorageError(f"Failed to write config file {self.path}: {exc}") from exc
        log.debug("saved %d connection(s) to %s", len(profiles), self.path)


class AppService:
    def __init__(self, config_dir=None):
        if config_dir is None:
            config_dir = default_config_dir()
        self.config_dir = config_dir
        self.store = ProfileStore(os.path.join(config_dir, STORAGE_FILENAME))
        self._cp = configparser.ConfigParser()
        self._cp.read([os.path.join(config_dir, SETTINGS_FILENAME)])

    @property
    def ssh_binary(self):
        return self._cp.get("ssh", "binary", fallback="ssh")

    @property
    def ssh_options(self):
        return shlex.split(self._cp.get("ssh", "options", fallback=""))

    @property
    def snippet_progress(self):
        return self._cp.getboolean("snippet", "progress", fallback=True)

    def create_ssh_connection(self, profile: Profile) -> SSH:
        return SSH(
            profile.host,
            profile.username,
            profile.port,
            binary=self.ssh_binary,
            options=self.ssh_options,
        )


class SshManagerError(Exception):
    pass


class StorageError(SshManagerError):
    pass


class InvalidValueError(SshManagerError):
    pass


class SnippetError(SshManagerError):
    pass
