import sys
import logging

logging.basicConfig(
    format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    level=logging.INFO,
    stream=sys.stderr,
)

logger = logging.getLogger("pbirthday")
logger.setLevel(logging.INFO)
