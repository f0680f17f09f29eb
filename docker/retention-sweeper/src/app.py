import logging

from flask import Flask

from .api import create_api_blueprint
from .config import load_config, load_service_settings
from .scheduler import SweepScheduler


def create_app() -> Flask:
    app = Flask(__name__)

    settings = load_service_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    config = load_config()
    scheduler = SweepScheduler(config, check_interval_seconds=settings.check_interval_seconds)
    scheduler.start()

    app.register_blueprint(create_api_blueprint(scheduler=scheduler), url_prefix="/api")
    app.extensions["sweep_scheduler"] = scheduler
    app.config["SWEEP_API_PORT"] = settings.api_port

    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=int(app.config["SWEEP_API_PORT"]))


if __name__ == "__main__":
    main()
