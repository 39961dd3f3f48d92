import argparse
import logging
from pathlib import Path

import uvicorn

from mealplanner.cli.shell import PlannerShell
from mealplanner.domain.Planner import Planner
from mealplanner.infra.paths import PLANNER_FILE
from mealplanner.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL
from mealplanner.utilities.network import LOOPBACK, get_local_ip


def run_shell(data_file: Path) -> None:
    """Load the planner once, run the console, then overwrite the file once."""
    planner = Planner.from_file(data_file)
    try:
        PlannerShell(planner).run()
    finally:
        planner.save(data_file)


def run_server(data_file: Path, host: str, port: int) -> None:
    from mealplanner.api.api_run import create_app

    local_ip = get_local_ip()
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Uvicorn running on http://localhost:{port} (Press CTRL+C to quit)")
    if local_ip != LOOPBACK:
        print(f"Accessible from other devices at: http://{local_ip}:{port}")
    uvicorn.run(create_app(data_file), host=host, port=port)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description='Weekly meal planner')
    parser.add_argument('mode', nargs='?', choices=['shell', 'serve'], default='shell',
                        help='Interactive console (default) or HTTP API')
    parser.add_argument('--file', default=str(PLANNER_FILE), help='Planner CSV file')
    parser.add_argument('--host', default=APP_HOST)
    parser.add_argument('--port', type=int, default=APP_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.mode == 'serve':
        run_server(Path(args.file), args.host, args.port)
    else:
        run_shell(Path(args.file))


if __name__ == "__main__":
    main()
