import logging
import json
import os
import time
import hashlib
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger
from .models import LogEntry, ComponentType, EventType

# Overrides logging.level from parentage_config.yaml when set
LOG_LEVEL_OVERRIDE = os.getenv("PARENTAGE_LOG_LEVEL")


class ParentageJSONFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(ParentageJSONFormatter, self).add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = time.time()
        if log_record.get('level'):
            log_record['level'] = log_record['level'].upper()
        else:
            log_record['level'] = record.levelname


def _resolve_level(level: Optional[str]) -> int:
    resolved = logging.getLevelName((LOG_LEVEL_OVERRIDE or level or "INFO").upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: Optional[str] = None):
    logger = logging.getLogger(name)
    # Handler and level are set once per logger name
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = ParentageJSONFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_resolve_level(level))
    logger.propagate = False
    return logger


class StructuredLogger:
    def __init__(self, component: ComponentType, level: Optional[str] = None):
        # The logger is shared per component; each instance filters by its own level
        self.logger = get_logger(f"parentage.{component.value}", "DEBUG")
        self.level = _resolve_level(level)
        self.component = component

    def hash_payload(self, payload: Any) -> str:
        """Create a hash of the payload for audit."""
        dumped = json.dumps(payload, sort_keys=True, default=str)
        return hashlib.md5(dumped.encode()).hexdigest()[:16]

    def log_event(self,
                  trace_id: str,
                  event_type: EventType,
                  payload: Any,
                  metrics: Dict[str, Any] = None,
                  level: int = logging.INFO):

        if level < self.level:
            return

        entry = LogEntry(
            trace_id=trace_id,
            component=self.component,
            event_type=event_type,
            payload_hash=self.hash_payload(payload),
            metrics=metrics or {},
            message=str(payload)[:200]  # Log a snippet for debug
        )

        self.logger.log(level, json.dumps(entry.model_dump(mode="json"), default=str))
