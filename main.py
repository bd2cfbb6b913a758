import os

from dotenv import load_dotenv

load_dotenv()

from logging_setup import configure_logging

# Initialize logging before importing app
configure_logging(
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    use_json=os.getenv("USE_MINIMAL_LOGGING", "true").lower() == "true"
)

from app import app  # noqa: E402
from scraper_config import get_scraper_config  # noqa: E402

if __name__ == "__main__":
    config = get_scraper_config()
    app.run(host=config.host, port=config.port, debug=False, threaded=True)
