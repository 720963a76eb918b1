import argparse


def interface_sshman():
    cli = argparse.ArgumentParser(
        prog="sshman", description="A CLI tool to manage SSH connections"
    )
    cli.add_argument("--config-dir", "-C", default=None)
    cli.add_argument("--verbose", "-v", action="store_true")
    commands = cli.add_mutually_exclusive_group(required=True)
    commands.add_argument(
        "--add",
        "-a",
        nargs="+",
        metavar="ARG",
        help="add a connection: NAME HOST PORT USERNAME [WELCOME_MESSAGE]",
    )
    commands.add_argument(
        "--list", "-l", action="store_true", help="list saved connections"
    )
    commands.add_argument(
        "--delete", "-d", metavar="NAME", help="delete every connection named NAME"
    )
    commands.add_argument(
        "--open", "-o", metavar="NAME", help="open an interactive ssh session"
    )
    commands.add_argument(
        "--edit",
        "-e",
        nargs=2,
        metavar=("NAME.PROPERTY", "VALUE"),
        help="change one property of a connection",
    )
    commands.add_argument(
        "--snippet",
        "-s",
        nargs=2,
        metavar=("NAME", "PATH"),
        help="run a local script on the remote host",
    )

    def call(opts):
        from sshman.core import AppService
        from sshman.hostlib import parse_port

        if opts.add is not None:
            if not 4 <= len(opts.add) <= 5:
                cli.error(
                    "--add expects NAME HOST PORT USERNAME [WELCOME_MESSAGE]"
                )
            name, host, port, username, *welcome = opts.add
            try:
                port = parse_port(port)
            except ValueError as exc:
                cli.error(f"argument --add/-a: {exc}")

            from sshman.tools import add

            app = AppService(opts.config_dir)
            return add.main(
                app, name, host, port, username, welcome[0] if welcome else None
            )

        app = AppService(opts.config_dir)
        if opts.list:
            from sshman.tools import listing

            return listing.main(app)
        if opts.delete is not None:
            from sshman.tools import delete

            return delete.main(app, opts.delete)
        if opts.open is not None:
            from sshman.tools import ssh

            return ssh.main(app, opts.open)
        if opts.edit is not None:
            from sshman.tools import edit

            return edit.main(app, *opts.edit)
        if opts.snippet is not None:
            from sshman.tools import snippet

            return snippet.main(app, *opts.snippet)
        cli.error("no command given")

    return cli, call
