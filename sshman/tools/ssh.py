from sshman import core
from sshman.hostlib import find_profile


def main(app: core.AppService, name):
    profile = find_profile(app.store.load(), name)
    if profile is None:
        print(f"Connection '{name}' not found.")
        return 0
    print(
        f"Opening SSH connection: {profile.get_ssh_connect_commandline()}",
        flush=True,
    )
    ssh_conn = app.create_ssh_connection(profile)
    return ssh_conn.interactive(profile.welcome_message)
