import json
import logging
import time
from typing import Any, Dict, Optional
from intlcat.i18n.exceptions import CatalogError, CatalogIOError, ParseError


Iso8601DateFormat = "%Y-%m-%dT%H:%M:%S"


def _catalog_error(record: logging.LogRecord) -> Optional[CatalogError]:
    """Find the catalog error a record is about.

    It is either passed as `extra={"catalog_error": err}` or logged with
    `exc_info`.
    """
    err = getattr(record, "catalog_error", None)
    if err is None and record.exc_info:
        err = record.exc_info[1]
    return err if isinstance(err, CatalogError) else None


def catalog_location(err: CatalogError) -> Optional[Dict[str, Any]]:
    """Return the file (or catalog language) and line an error points at."""
    if isinstance(err, ParseError) and err.source is not None:
        return {"file": err.source, "line": err.lineno}
    elif isinstance(err, CatalogIOError):
        return {"file": err.path, "line": None}
    else:
        return None


class JsonFormatter(logging.Formatter):
    """One JSON object per log record, for log collectors.

    Records about a `CatalogError` get a "catalogLocation" naming the source
    file or catalog at fault, next to the "sourceLocation" of the log call.
    """

    # override
    def format(self, record):
        time_struct = time.gmtime(record.created)
        timestamp = time.strftime(Iso8601DateFormat, time_struct) + (
            ".%03dZ" % record.msecs
        )

        data = {
            "severity": record.levelname,
            "timestamp": timestamp,
            "logger": record.name,
            "sourceLocation": {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            },
            "message": super().format(record),
        }

        err = _catalog_error(record)
        if err is not None:
            data["error"] = type(err).__name__
            location = catalog_location(err)
            if location is not None:
                data["catalogLocation"] = location

        return json.dumps(data)
