"""
Monitoramento: métricas Prometheus e visualizador do app.log.
"""
import html
import re
from datetime import datetime
from string import Template
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse, Response

from partnerhub.core.auth_dependencies import require_admin
from partnerhub.utils.logger import LOG_FILE, logger
from partnerhub.utils.prometheus_metrics import CONTENT_TYPE_LATEST, get_metrics

router = APIRouter(
    prefix="/api/monitoring",
    tags=["Monitoring - Monitoramento"],
    dependencies=[Depends(require_admin)],
)

# Router público para métricas (sem autenticação)
router_public = APIRouter(
    prefix="/api/monitoring",
    tags=["Monitoring - Monitoramento"],
)

# asctime [LEVEL] logger: mensagem
_LINE_RE = re.compile(r"^(\S+ \S+) \[(\w+)\] (.*?): (.*)$")

_LEVEL_COLORS = {
    "ERROR": ("#ff6b6b", "#2d1b1b"),
    "CRITICAL": ("#ff6b6b", "#2d1b1b"),
    "WARNING": ("#ffd93d", "#2d2b1b"),
    "DEBUG": ("#95a5a6", "#1e1e1e"),
    "INFO": ("#4ecdc4", "#1e1e1e"),
}
_PAGE = Template("""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>PartnerHub - logs</title>
<style>
body { font-family: monospace; margin: 0; padding: 16px; background: #1e1e1e; color: #d4d4d4; }
header { display: flex; gap: 16px; align-items: center; margin-bottom: 12px; }
.entry { margin: 1px 0; padding: 3px 6px; font-size: 12px; border-left: 3px solid; white-space: pre-wrap; }
.empty { color: #888; }
</style>
</head>
<body>
<header>
<strong>$count linha(s)</strong>
<span>$path</span>
<span>gerado em $generated</span>
<form method="get" action="/api/monitoring/logs">
<input type="number" name="lines" value="$lines" min="1" max="1000">
<select name="level"><option value="">todos</option>$options</select>
<input type="text" name="search" value="$search" placeholder="texto">
<button type="submit">filtrar</button>
</form>
</header>
$entries
</body>
</html>
""")


class LogQuery:
    """Filtros comuns das rotas de log."""

    def __init__(
        self,
        lines: int = Query(100, ge=1, le=1000, description="Quantidade de linhas finais do arquivo"),
        level: Optional[str] = Query(None, description="ERROR, WARNING, INFO ou DEBUG"),
        search: Optional[str] = Query(None, description="Texto contido na linha"),
    ):
        self.lines = lines
        self.level = level.upper() if level else None
        self.search = search

    def read(self) -> List[str]:
        """Últimas linhas do app.log, filtradas por nível e texto."""
        if not LOG_FILE.exists():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Log file not found")
        try:
            tail = LOG_FILE.read_text(encoding="utf-8").splitlines()[-self.lines:]
        except OSError as e:
            logger.error(f"[MONITORING] Falha lendo {LOG_FILE}: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not read log file")

        selected = [line for line in tail if line.strip()]
        if self.level:
            selected = [line for line in selected if _line_level(line) == self.level]
        if self.search:
            needle = self.search.lower()
            selected = [line for line in selected if needle in line.lower()]
        return selected


def _line_level(line: str) -> str:
    match = _LINE_RE.match(line)
    if match:
        return match.group(2).upper()
    return "INFO"


def _render_entry(line: str) -> str:
    fg, bg = _LEVEL_COLORS.get(_line_level(line), _LEVEL_COLORS["INFO"])
    return f'<div class="entry" style="color:{fg};background:{bg};border-color:{fg}">{html.escape(line)}</div>'


@router_public.get("/metrics")
async def metrics():
    """Exposição Prometheus, sem autenticação."""
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)


@router.get("/logs", response_class=HTMLResponse)
def view_logs(query: LogQuery = Depends()):
    """Visualizador HTML: /api/monitoring/logs?lines=200&level=ERROR&search=reserva"""
    entries = [_render_entry(line) for line in query.read()]
    options = "".join(
        f'<option value="{lv}"{" selected" if query.level == lv else ""}>{lv}</option>'
        for lv in ("ERROR", "WARNING", "INFO", "DEBUG")
    )
    page = _PAGE.substitute(
        count=len(entries),
        path=html.escape(str(LOG_FILE)),
        generated=datetime.now().strftime("%d/%m/%Y %H:%M:%S"),
        lines=query.lines,
        options=options,
        search=html.escape(query.search or ""),
        entries="\n".join(entries) or '<div class="empty">Nenhuma linha para os filtros.</div>',
    )
    return HTMLResponse(page)


@router.get("/logs/json")
def logs_json(query: LogQuery = Depends()):
    entries = []
    for line in query.read():
        match = _LINE_RE.match(line)
        if match is None:
            entries.append({"raw": line})
            continue
        timestamp, level, logger_name, message = match.groups()
        entries.append({"timestamp": timestamp, "level": level, "logger": logger_name, "message": message})

    return {
        "total": len(entries),
        "lines": query.lines,
        "filters": {"level": query.level, "search": query.search},
        "logs": entries,
    }
