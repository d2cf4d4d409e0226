"""stdio transport — newline-delimited JSON-RPC over stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from cassini_mcp.protocol.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


class StdioServer:
    """Reads one request per line and writes one response per line.

    Blank lines are skipped.  Blocking reads run on a worker thread so the
    event loop stays free for the repository.  Logging must go to stderr;
    stdout carries only responses.
    """

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        reader: TextIO | None = None,
        writer: TextIO | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader or sys.stdin
        self._writer = writer or sys.stdout

    async def serve(self) -> int:
        """Serve until EOF; return the number of requests answered."""
        handled = 0
        while True:
            line = await asyncio.to_thread(self._reader.readline)
            if not line:
                break
            if not line.strip():
                continue
            response = await self._dispatcher.handle(line)
            self._writer.write(response.decode("utf-8") + "\n")
            self._writer.flush()
            handled += 1
        logger.info("stdin closed after %d request(s)", handled)
        return handled
