"""Newline-delimited TCP source.

Establishing connects to a TCP endpoint; polling reads one line and
renders it as text.
"""

from typing import final

import anyio
from anyio.streams.buffered import BufferedByteReceiveStream

from sourcewatch.exceptions import SourceDrainedError, SourceError

DELIMITER = b"\n"


@final
class TcpLineSource:
    """Source that yields newline-delimited text frames from a TCP peer.

    Attributes:
        host: Host to connect to.
        port: TCP port to connect to.
        max_frame_bytes: Longest accepted line, excluding the delimiter.
    """

    __slots__ = ("host", "max_frame_bytes", "port")

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8080,
        *,
        max_frame_bytes: int = 65536,
    ) -> None:
        self.host = host
        self.port = port
        self.max_frame_bytes = max_frame_bytes

    @property
    def address(self) -> str:
        """Return the endpoint as ``host:port``."""
        return f"{self.host}:{self.port}"

    async def establish(self) -> BufferedByteReceiveStream:
        """Open a connection to the endpoint.

        Raises:
            OSError: If the connection cannot be made.
        """
        stream = await anyio.connect_tcp(self.host, self.port)
        return BufferedByteReceiveStream(stream)

    async def poll(self, instance: BufferedByteReceiveStream) -> str:
        """Read the next line from the connection.

        Undecodable bytes are replaced and a trailing carriage return is
        stripped.

        Raises:
            SourceDrainedError: If the peer closed the connection.
            SourceError: If a line exceeds max_frame_bytes.
        """
        try:
            frame = await instance.receive_until(DELIMITER, self.max_frame_bytes)
        except anyio.IncompleteRead as e:
            msg = f"Connection to {self.address} drained"
            raise SourceDrainedError(msg) from e
        except anyio.DelimiterNotFound as e:
            msg = f"Frame from {self.address} exceeds {self.max_frame_bytes} bytes"
            raise SourceError(msg) from e

        # receive_until only enforces the limit while the delimiter is missing
        if len(frame) > self.max_frame_bytes:
            msg = f"Frame from {self.address} exceeds {self.max_frame_bytes} bytes"
            raise SourceError(msg)

        return frame.decode("utf-8", errors="replace").removesuffix("\r")
