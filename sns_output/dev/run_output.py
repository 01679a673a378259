from __future__ import annotations

import logging
import sys
from typing import List, Optional

from sns_output.bootstrap import wire_output
from sns_output.config.yaml_config import load_output_config
from sns_output.transport.ndjson import iter_events


def main(argv: Optional[List[str]] = None) -> int:
    """
    Publish NDJSON events read from stdin.

    Notes
    -----
    - Loads configuration from `config.yaml` by default.
    - Optional CLI usage:
        python -m sns_output.dev.run_output --config path/to/config.yaml < events.ndjson
    - Exit status is 1 when any event failed or was dropped.
    """
    argv = sys.argv[1:] if argv is None else argv

    config_path = None
    if "--config" in argv:
        i = argv.index("--config")
        if i + 1 < len(argv):
            config_path = argv[i + 1]

    cfg = load_output_config(config_path)
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    wiring = wire_output(cfg)

    wiring.workers.start()
    try:
        for event in iter_events(sys.stdin):
            wiring.workers.emit(event, block=True)
    finally:
        wiring.workers.stop(timeout=None)

    stats = wiring.workers.stats()
    logging.getLogger("sns_output").info(
        "Done: %d sent, %d failed, %d dropped", stats["sent"], stats["failed"], stats["dropped"]
    )
    return 1 if stats["failed"] or stats["dropped"] else 0


if __name__ == "__main__":
    sys.exit(main())
