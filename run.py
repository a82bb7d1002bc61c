import logging
import os

from quizgame import create_app
from quizgame.config import DevelopmentConfig, ProductionConfig

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

CONFIGS = {"development": DevelopmentConfig, "production": ProductionConfig}

app = create_app(CONFIGS.get(os.environ.get("QUIZGAME_ENV", "development"), DevelopmentConfig))

if __name__ == "__main__":
    # threaded server; one player's random-play requests queue on the session lock
    app.run(
        host=os.environ.get("QUIZGAME_HOST", "127.0.0.1"),
        port=int(os.environ.get("QUIZGAME_PORT", "5000")),
        debug=app.config.get("DEBUG", False),
        threaded=True,
    )
