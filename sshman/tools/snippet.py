import logging
import os
from sshman import core
from sshman.hostlib import find_profile


log = logging.getLogger(__name__)


def main(app: core.AppService, name, script_path):
    profile = find_profile(app.store.load(), name)
    if profile is None:
        print(f"Connection '{name}' not found.")
        return

    try:
        with open(script_path, "rb") as f:
            contents = f.read()
    except OSError as exc:
        raise core.SnippetError(f"Failed to read snippet {script_path}: {exc}") from exc
    log.info("sending %d byte(s) of %s to %s", len(contents), script_path, name)

    ssh_conn = app.create_ssh_connection(profile)
    rc = ssh_conn.run_script(
        contents,
        progress=app.snippet_progress,
        desc=os.path.basename(script_path),
    )
    if rc == 0:
        print("Snippet executed successfully!")
    else:
        log.error("Snippet failed with exit status %d.", rc)
