#!/usr/bin/env python3
from sshman import tool_cli
import logging.config


log = logging.getLogger(__name__)


def main(argv=None):
    _run_main(tool_cli.interface_sshman, argv)


def _run_main(cli_fn, argv=None):
    cli, func = cli_fn()
    opts = cli.parse_args(argv)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {
                "stderr": {
                    "level": "DEBUG",
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                }
            },
            "filters": {},
            "formatters": {
                "default": {
                    "()": _LevelConditionalFormatter,
                    "default_fmt": "%(levelname)s:%(name)s: %(message)s",
                    "INFO": "%(name)s: %(message)s",
                    "ERROR": "error: %(message)s",
                }
            },
            "loggers": {
                "": {
                    "handlers": ["stderr"],
                    "level": "DEBUG" if opts.verbose else "WARNING",
                }
            },
        }
    )

    import sys
    from sshman import core, sshlib

    try:
        rc = func(opts)
    except (core.SshManagerError, sshlib.SshLaunchError) as exc:
        log.error("%s", exc)
        rc = 1
    sys.exit(rc)


class _LevelConditionalFormatter(logging.Formatter):
    def __init__(self, default_fmt, **perlevel_formats):
        super(_LevelConditionalFormatter, self).__init__()
        self._default_style = logging.PercentStyle(default_fmt)
        self._perlevel_styles = {
            level: logging.PercentStyle(fmt)
            for level, fmt in perlevel_formats.items()
        }

    def formatMessage(self, record):
        style = self._perlevel_styles.get(record.levelname, self._default_style)
        return style.format(record)
