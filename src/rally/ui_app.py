from __future__ import annotations

import argparse
from pathlib import Path

from rally.core import configure_logging, load_runtime_config
from rally.service import DrawRuntime
from rally.ui import launch_ui


def main() -> None:
    parser = argparse.ArgumentParser(description="Rally Draw desktop launcher")
    parser.add_argument("--root", type=Path, default=None, help="runtime root directory")
    parser.add_argument("--seed", type=int, default=None, help="seed for deterministic dev/testing draws")
    args = parser.parse_args()

    config = load_runtime_config(root=args.root, seed=args.seed)
    configure_logging(config.log_level)
    runtime = DrawRuntime(config)
    launch_ui(runtime.handle_action)


if __name__ == "__main__":
    main()
