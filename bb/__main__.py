import sys
from bb.common.logger import log
from bb.ui.app import main

# Entry point for `python -m bb` and the `boxbreathe` script
def run() -> None:
    try:
        main()
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
