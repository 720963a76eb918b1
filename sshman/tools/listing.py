from sshman import core


def main(app: core.AppService):
    profiles = app.store.load()
    if not profiles:
        print("No SSH connections found.")
        return
    for profile in profiles:
        print(profile.describe())
