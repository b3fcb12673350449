from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..core.timeutil import archive_stamp

logger = logging.getLogger(__name__)


class PollArchive:
    """Best-effort store of raw poll bodies, one file per cycle."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, polled_at: datetime) -> Path:
        return self._dir / archive_stamp(polled_at)

    def store(self, polled_at: datetime, body: bytes) -> Optional[Path]:
        path = self.path_for(polled_at)
        try:
            path.write_bytes(body)
        except OSError as e:
            logger.debug("Archive write to %s failed: %s", path, e)
            return None
        return path
