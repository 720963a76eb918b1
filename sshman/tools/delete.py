import logging
from sshman import core
from sshman.hostlib import delete_profiles


log = logging.getLogger(__name__)


def main(app: core.AppService, name):
    profiles = app.store.load()
    removed = delete_profiles(profiles, name)
    log.debug("removed %d connection(s) named %r", removed, name)
    # saved and reported even when nothing matched
    app.store.save(profiles)
    print("Connection deleted!")
