from sshman import core
from sshman.hostlib import Profile, add_profile


def main(app: core.AppService, name, host, port, username, welcome_message=None):
    profiles = app.store.load()
    add_profile(
        profiles,
        Profile(
            name=name,
            host=host,
            port=port,
            username=username,
            welcome_message=welcome_message,
        ),
    )
    app.store.save(profiles)
    print("Connection added!")
