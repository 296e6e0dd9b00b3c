"""
Journalisation de TVTrack via loguru.

Deux sorties : la console (coloree, niveau reglable) et un fichier JSON
tournant qui garde tout a partir de DEBUG, y compris les appels TMDB.

Les secrets ne doivent jamais atteindre les journaux : la cle TMDB
(api_key=...), les jetons Bearer et les mots de passe sont masques dans
le message et dans les champs extra de chaque enregistrement.

Les bibliotheques qui utilisent le module logging standard (uvicorn,
httpx) sont redirigees vers loguru ; httpx et httpcore ne remontent que
leurs avertissements.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

from loguru import logger

REDACTED = "***"

_SECRET_PATTERNS = (
    re.compile(r"(api_key=)[^&\s\"']+", re.IGNORECASE),
    re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+"),
    re.compile(r"(\"?password\"?\s*[:=]\s*\"?)[^\"&\s,}]+", re.IGNORECASE),
)

# Loggers standard trop bavards en DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def redact(text: str) -> str:
    """Masque les secrets connus dans une chaine."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(rf"\g<1>{REDACTED}", text)
    return text


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact(value)
    if isinstance(value, dict):
        return {
            key: REDACTED if key in ("api_key", "password") else _redact_value(item)
            for key, item in value.items()
        }
    return value


def redact_record(record: dict) -> None:
    """Patcher loguru : nettoie le message et les champs extra."""
    record["message"] = redact(record["message"])
    for key, value in list(record["extra"].items()):
        record["extra"][key] = _redact_value(value)


class InterceptHandler(logging.Handler):
    """Redirige un enregistrement logging standard vers loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Remonte la pile jusqu'a l'appelant reel, hors module logging
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_standard_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/tvtrack.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """
    Installe les sorties console et fichier.

    Args:
        log_level: Niveau minimum de la console (DEBUG, INFO, WARNING, ERROR)
        log_file: Fichier JSON, cree avec son dossier si besoin
        rotation_size: Taille declenchant la rotation (ex: "10 MB")
        retention_count: Nombre de fichiers tournes conserves
    """
    logger.remove()
    logger.configure(patcher=redact_record)

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    intercept_standard_logging()
    logger.debug("Journalisation configuree", log_file=str(log_file), rotation=rotation_size)
