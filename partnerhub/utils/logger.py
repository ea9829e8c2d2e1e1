"""
Logger central da aplicação.

Escreve no console e em LOG_DIR/app.log (rotacionado). O visualizador em
/api/monitoring/logs filtra pelo marcador [LEVEL] deste formato.
"""
import logging
from logging.handlers import RotatingFileHandler

from partnerhub.config.settings import LOG_DIR, LOG_LEVEL
from partnerhub.utils.prometheus_metrics import record_log

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = LOG_DIR / "app.log"


class PrometheusLogHandler(logging.Handler):
    """Conta mensagens de log por nível no Prometheus."""

    def emit(self, record: logging.LogRecord) -> None:
        record_log(record.levelname)


def _build_logger() -> logging.Logger:
    _logger = logging.getLogger("partnerhub")
    if _logger.handlers:
        return _logger

    _logger.setLevel(LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    _logger.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        _logger.addHandler(file_handler)
    except OSError as e:
        # Sem permissão de escrita: segue só com console
        _logger.warning(f"Não foi possível abrir arquivo de log {LOG_FILE}: {e}")

    _logger.addHandler(PrometheusLogHandler())
    _logger.propagate = False
    return _logger


logger = _build_logger()
