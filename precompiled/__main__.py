#!/usr/bin/env python3

import os
import sys

from precompiled.utils.global_mode import EnvGlobalModeProvider


def entrypoint() -> None:
    gm = EnvGlobalModeProvider(os.environ, sys.argv)

    # NOTE: import of rich is deferred until logging is actually needed

    if not sys.argv:
        from precompiled.log import PrecompiledConsoleLogger

        logger = PrecompiledConsoleLogger(gm)

        logger.F("no argv?")
        sys.exit(1)

    from precompiled.config import GlobalConfig
    from precompiled.cli.main import main
    from precompiled.log import PrecompiledConsoleLogger, set_default_logger

    logger = PrecompiledConsoleLogger(gm)
    set_default_logger(logger)
    gc = GlobalConfig(gm, logger)
    sys.exit(main(gm, gc, sys.argv))


if __name__ == "__main__":
    entrypoint()
