import os
import sys
from pathlib import Path

from loguru import logger

log_dir = Path(os.getenv("HARVEST_LOG_DIR", "logs"))
log_file = log_dir / "harvest_{time}.log"
log_level = os.getenv("HARVEST_LOG_LEVEL", "INFO").upper()

logger.remove()
logger.add(
    sys.stderr,
    level=log_level,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
)
logger.add(
    log_file,
    rotation="256 MB",  # 每個檔案滿 256MB 就切分
    retention="10 days",  # 只保留最近 10 天的日誌
    compression="zip",
    encoding="utf-8",
    level="DEBUG",
    enqueue=True,
)
