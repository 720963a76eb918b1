import contextlib
import logging
import shlex
import signal
import subprocess
import tqdm


log = logging.getLogger("sshlib")

# tried in this order when the remote $SHELL is unset
SHELL_FALLBACK = ("bash", "zsh", "ksh", "sh")

SNIPPET_REMOTE_COMMAND = (
    'tmp="$(mktemp)" || exit 1; '
    'cat > "$tmp" && chmod +x "$tmp" && "$tmp"; '
    "rc=$?; "
    'rm -f "$tmp"; '
    "exit $rc"
)

_CHUNK_SIZE = 64 * 1024


def login_shell_command(welcome_message=None) -> str:
    fallback = " || ".join(f"command -v {sh}" for sh in SHELL_FALLBACK)
    return (
        f"echo {shlex.quote(welcome_message or '')}; "
        f'exec "${{SHELL:-$({fallback})}}" -l'
    )


class SSH:
    """Runs the external ssh client against a single ``user@host:port``."""

    def __init__(self, hostname, ssh_user, port, binary="ssh", options=()):
        self._hostname = hostname
        self._user = ssh_user
        self._port = port
        self._binary = binary
        self._options = list(options)

    @property
    def target(self):
        return f"{self._user}@{self._hostname}"

    def interactive_argv(self, welcome_message=None):
        return [
            self._binary,
            *self._options,
            "-t",
            self.target,
            "-p",
            str(self._port),
            login_shell_command(welcome_message),
        ]

    def script_argv(self):
        return [
            self._binary,
            *self._options,
            "-p",
            str(self._port),
            self.target,
            SNIPPET_REMOTE_COMMAND,
        ]

    def interactive(self, welcome_message=None) -> int:
        """Hand the terminal over to ssh and block until it exits."""
        with _sigint_left_to_child():
            proc = self._spawn(self.interactive_argv(welcome_message))
            rc = _exit_status(proc.wait())
        log.info("%r: session finished with exit status %d", self, rc)
        return rc

    def run_script(self, contents: bytes, progress=True, desc=None) -> int:
        """Execute ``contents`` remotely by feeding it to ssh's stdin.

        The script is stored in a remote temp file, made executable, run and
        removed again. Returns the exit status of the ssh process, which is
        the status of the script unless ssh itself failed.
        """
        with _sigint_left_to_child():
            proc = self._spawn(self.script_argv(), stdin=subprocess.PIPE)
            pb = tqdm.tqdm(
                desc=desc,
                total=len(contents),
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                disable=None if progress else True,
            )
            try:
                for offset in range(0, len(contents), _CHUNK_SIZE):
                    chunk = contents[offset:offset + _CHUNK_SIZE]
                    proc.stdin.write(chunk)
                    pb.update(len(chunk))
            except BrokenPipeError:
                log.warning("%r: remote side stopped reading the snippet early", self)
            finally:
                pb.close()
                try:
                    proc.stdin.close()
                except BrokenPipeError:
                    log.debug("%r: unsent snippet data dropped", self)
            rc = _exit_status(proc.wait())
        log.info("%r: snippet finished with exit status %d", self, rc)
        return rc

    def _spawn(self, argv, **kwargs):
        log.info("%r: cmd: %s", self, " ".join(shlex.quote(a) for a in argv))
        try:
            return subprocess.Popen(argv, preexec_fn=_restore_sigint, **kwargs)
        except OSError as exc:
            raise SshLaunchError(f"Failed to start SSH process {argv[0]!r}: {exc}") from exc

    def __repr__(self):
        return f"SSH({self.target}:{self._port})"


class SshLaunchError(Exception):
    pass


@contextlib.contextmanager
def _sigint_left_to_child():
    # like os.system(): Ctrl-C is ssh's business while it runs
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _restore_sigint():
    signal.signal(signal.SIGINT, signal.SIG_DFL)


def _exit_status(returncode):
    # killed by signal N -> 128 + N, as a shell reports it
    if returncode < 0:
        return 128 - returncode
    return returncode
