import dataclasses
import typing


PORT_MAX = 65535

EDITABLE_FIELDS = ("name", "host", "port", "username", "welcome_message")


@dataclasses.dataclass
class Profile:
    name: str
    host: str
    port: int
    username: str
    welcome_message: typing.Optional[str] = None

    @classmethod
    def from_dict(cls, data) -> "Profile":
        if not isinstance(data, dict):
            raise ValueError(f"profile entry must be an object, got {data!r}")
        for key in ("name", "host", "username"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"profile field {key!r} must be a string: {data!r}")
        port = data.get("port")
        # bool is an int subclass, json true/false are not ports
        if isinstance(port, bool) or not isinstance(port, int):
            raise ValueError(f"profile field 'port' must be an integer: {data!r}")
        if not 0 <= port <= PORT_MAX:
            raise ValueError(f"profile port out of range: {port}")
        welcome_message = data.get("welcome_message")
        if welcome_message is not None and not isinstance(welcome_message, str):
            raise ValueError(
                f"profile field 'welcome_message' must be a string or null: {data!r}"
            )
        return cls(
            name=data["name"],
            host=data["host"],
            port=port,
            username=data["username"],
            welcome_message=welcome_message,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "welcome_message": self.welcome_message,
        }

    @property
    def ssh_target(self):
        return f"{self.username}@{self.host}"

    def get_ssh_connect_commandline(self):
        return f"ssh {self.ssh_target} -p {self.port}"

    def describe(self):
        return (
            f"Name: {self.name}, Host: {self.host}, "
            f"Port: {self.port}, Username: {self.username}"
        )


def parse_port(value) -> int:
    """Parse ``value`` as an unsigned 16-bit port number.

    :raises ValueError: when it is not a decimal integer in 0..65535
    """
    text = str(value)
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"invalid port number: {value!r}")
    port = int(text)
    if port > PORT_MAX:
        raise ValueError(f"port number out of range: {value!r}")
    return port


def split_identifier(identifier: str) -> typing.Tuple[str, str]:
    """``"<name>.<field>"`` -> ``(name, field)``, split on the first dot."""
    name, sep, field = identifier.partition(".")
    if not sep:
        raise ValueError(
            f"invalid identifier {identifier!r}: expected <name>.<property>"
        )
    return name, field


def find_profile(profiles, name) -> typing.Optional[Profile]:
    for profile in profiles:
        if profile.name == name:
            return profile
    return None


def add_profile(profiles, profile: Profile):
    profiles.append(profile)
    return profiles


def delete_profiles(profiles, name):
    """Drop every profile called ``name``; returns how many were removed."""
    kept = [p for p in profiles if p.name != name]
    removed = len(profiles) - len(kept)
    profiles[:] = kept
    return removed


class EditResult:
    UPDATED = "updated"
    NOT_FOUND = "not-found"
    INVALID_PROPERTY = "invalid-property"


def edit_profile(profiles, name, field, value) -> str:
    profile = find_profile(profiles, name)
    if profile is None:
        return EditResult.NOT_FOUND
    if field not in EDITABLE_FIELDS:
        return EditResult.INVALID_PROPERTY
    if field == "port":
        value = parse_port(value)
    setattr(profile, field, value)
    return EditResult.UPDATED
