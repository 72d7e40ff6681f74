"""Storyline dev launcher. Starts the backend in watch mode."""

import argparse
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = os.getenv("BACKEND_PORT", "13013")


def main():
    parser = argparse.ArgumentParser(description="Storyline dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--presets-dir", type=Path, default=None,
                        help="Story presets directory (default: $PRESETS_DIR or ./presets)")
    parser.add_argument("--demo", action="store_true",
                        help="Clean and create demo save data")
    args = parser.parse_args()

    presets_dir = args.presets_dir
    if presets_dir is None and os.getenv("PRESETS_DIR"):
        presets_dir = Path(os.environ["PRESETS_DIR"])

    # Handle --demo: init storage and populate, then continue to dev server
    if args.demo or args.data_dir:
        from storyline import storage
        data_dir = args.data_dir or Path("data")
        storage.init_storage(data_dir, presets_dir=presets_dir)
        if args.demo:
            from storyline.demo import create_demo_data
            create_demo_data()

    # Build env for the subprocess so the backend picks up the same directories
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())
    if presets_dir:
        env["PRESETS_DIR"] = str(presets_dir.resolve())

    print(f"Starting backend on http://localhost:{BACKEND_PORT} ...")
    proc = subprocess.Popen(
        ["uv", "run", "uvicorn", "storyline.app:app", "--reload", "--host", HOST, "--port", BACKEND_PORT],
        cwd=ROOT, env=env,
    )

    def shutdown(*_):
        print("\nShutting down...")
        proc.terminate()
        proc.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    proc.wait()


if __name__ == "__main__":
    main()
