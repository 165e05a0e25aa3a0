#!/usr/bin/env python3
"""
Run a Playwrite script against an in-memory stage.

Usage:
    python -m playwrite SCRIPT [SIGNAL[:ELEMENT] ...]

Each SIGNAL is fired after the script has run, e.g. ``load`` or
``click:banner``. Set PLAYWRITE_CONFIG to use a config file other than
config/playwrite.defaults.yml.
"""

import json
import logging
import os
import sys
from pathlib import Path

from .catalog import register_defaults
from .config import default_config, load_config
from .errors import RegistrationError
from .interpreter import Interpreter
from .keywords import KeywordRegistry
from .stage import Stage
from .trigger import EventHost, ExecutionTrigger

logger = logging.getLogger("playwrite")


def main(argv=None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in {"-h", "--help"}:
        print(__doc__.strip())
        return 0 if argv else 2

    config_path = Path(os.environ.get("PLAYWRITE_CONFIG", "config/playwrite.defaults.yml"))
    config = load_config(config_path) if config_path.exists() else default_config()

    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        level=getattr(logging, config.log_level, logging.INFO),
    )

    stage = Stage()
    host = EventHost()
    registry = KeywordRegistry()
    try:
        register_defaults(registry, stage, config.catalog_path)
    except RegistrationError as e:
        logger.error("Keyword catalog rejected: %s", e)
        return 1
    except OSError as e:
        logger.error("Keyword catalog unreadable: %s", e)
        return 1

    try:
        script = Path(argv[0]).read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Script unreadable: %s", e)
        return 1

    interpreter = Interpreter(registry, ExecutionTrigger(host), config)
    results = interpreter.run_script(script)

    for signal in argv[1:]:
        name, _, element = signal.partition(":")
        fired = host.fire(element or stage, name)
        logger.info("Fired %s: %d binding(s)", signal, fired)

    print(json.dumps(
        {
            "commands": [r.to_record().to_dict() for r in results],
            "elements": stage.elements,
            "actions": [a.to_dict() for a in stage.actions],
        },
        indent=2,
        default=str,
    ))
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
