from sshman import core
from sshman.hostlib import EditResult, edit_profile, split_identifier


def main(app: core.AppService, identifier, value):
    try:
        name, field = split_identifier(identifier)
    except ValueError as exc:
        raise core.InvalidValueError(str(exc)) from exc

    profiles = app.store.load()
    try:
        result = edit_profile(profiles, name, field, value)
    except ValueError as exc:
        raise core.InvalidValueError(f"Invalid value for {identifier}: {exc}") from exc

    if result == EditResult.NOT_FOUND:
        print(f"Connection '{name}' not found.")
        return
    if result == EditResult.INVALID_PROPERTY:
        print(f"Invalid property '{field}'.")
    else:
        print("Connection updated!")
    # an unknown property still rewrites the store
    app.store.save(profiles)
