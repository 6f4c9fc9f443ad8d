"""Line-delimited JSON-RPC over stdin/stdout.

One JSON envelope per line in each direction. The whole connection is a
single session that must start with ``initialize``. stdout carries protocol
traffic only; logs go to stderr.
"""

import asyncio
import logging
import os
import stat
import sys
from typing import BinaryIO, TextIO

from ..exceptions import InvalidRequest, MalformedMessage, ProtocolViolation
from .codec import decode_payload, encode_message, request_id_of, to_request
from .dispatcher import Dispatcher
from .jsonrpc import jsonrpc_error_from
from .sessions import Session

logger = logging.getLogger(__name__)

# asyncio's 64 KiB default is too small for large tool arguments
STREAM_LIMIT = 16 * 1024 * 1024

EXIT_OK = 0
EXIT_TERMINATED = 1


def _write(writer: TextIO, envelope: dict) -> None:
    writer.write(encode_message(envelope) + "\n")
    writer.flush()


async def serve_stream(
    reader: asyncio.StreamReader,
    writer: TextIO,
    dispatcher: Dispatcher,
) -> int:
    """Serve one duplex connection until EOF or a fatal error.

    Messages are handled strictly in arrival order. Requests without an
    ``id`` member get no reply line.

    Returns:
        EXIT_OK on end of input, EXIT_TERMINATED when the connection was
        broken off (malformed line or call before initialize)
    """
    session = Session("stdio")

    while True:
        try:
            line = await reader.readline()
        except ValueError as e:
            # Line longer than the stream limit
            _write(writer, jsonrpc_error_from(None, MalformedMessage(f"Parse error: {e}")))
            return EXIT_TERMINATED
        if not line:
            return EXIT_OK
        line = line.strip()
        if not line:
            continue

        try:
            payload = decode_payload(line)
        except MalformedMessage as e:
            logger.error(f"Malformed message, closing connection: {e.message}")
            _write(writer, jsonrpc_error_from(None, e))
            return EXIT_TERMINATED

        try:
            request = to_request(payload)
        except InvalidRequest as e:
            _write(writer, jsonrpc_error_from(request_id_of(payload), e))
            continue

        try:
            response = await dispatcher.handle(request, session, lenient=False)
        except ProtocolViolation as e:
            logger.error(f"Protocol violation, closing connection: {e.message}")
            return EXIT_TERMINATED

        if not request.is_notification:
            _write(writer, response)


def _is_pipe(stream: TextIO) -> bool:
    mode = os.fstat(stream.fileno()).st_mode
    return stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode) or stat.S_ISCHR(mode)


async def feed_from_file(reader: asyncio.StreamReader, stream: BinaryIO) -> None:
    """Copy a blocking binary stream into ``reader`` line by line.

    Reads run in a worker thread. The reader always sees EOF at the end,
    including when the copy is cancelled.
    """
    try:
        while True:
            chunk = await asyncio.to_thread(stream.readline)
            if not chunk:
                break
            reader.feed_data(chunk)
    finally:
        reader.feed_eof()


async def run_stdio(
    dispatcher: Dispatcher,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Serve the process's stdin/stdout.

    Pipes, sockets and terminals are read through the event loop. Anything
    else, such as a file redirected onto stdin, is read from a thread.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    reader = asyncio.StreamReader(limit=STREAM_LIMIT)

    feeder = None
    if _is_pipe(stdin):
        loop = asyncio.get_running_loop()
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, stdin)
    else:
        feeder = asyncio.create_task(feed_from_file(reader, stdin.buffer))

    logger.info("Serving MCP over stdio")
    try:
        return await serve_stream(reader, stdout, dispatcher)
    finally:
        if feeder is not None:
            feeder.cancel()
