#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: python -m networth_planner

from networth_planner.app import create_app
from networth_planner.config import get_settings
from networth_planner.logging_config import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    app = create_app(settings)
    app.run(host=settings.api_host, port=settings.api_port, debug=settings.debug)


if __name__ == "__main__":
    main()
