"""Invocation of the external Graphviz renderer."""

import logging
import subprocess
import threading
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_RENDERER = "dot"
DEFAULT_FORMAT = "svg"


class RenderError(RuntimeError):
    """The renderer could not be run or its output could not be written."""


def renderer_command(command: str = DEFAULT_RENDERER, output_format: str = DEFAULT_FORMAT) -> list[str]:
    """Build the renderer argv, e.g. ["dot", "-Tsvg"]."""
    return [command, f"-T{output_format}"]


def _read_stream(stream, chunks: list[bytes]) -> None:
    """Drain a pipe into chunks (runs on a reader thread)."""
    chunks.append(stream.read())
    stream.close()


def _write_stream(stream, data: bytes) -> None:
    """Write all of data to an unbuffered pipe, then close it."""
    view = memoryview(data)
    while view:
        written = stream.write(view)
        view = view[written:]
    stream.close()


def render_graph(
    dot_content: str,
    output_path: Path | str,
    command: Sequence[str] | None = None,
) -> int:
    """Pipe a DOT description through the renderer into a file.

    The description is written from this thread while a reader thread drains
    the renderer's stdout, so neither side can stall on a full pipe. A
    renderer that stops reading its input before the whole description is
    written is a failure. Its exit status is logged but not treated as a
    failure; its stdout is written to the output file whatever it contains.

    Args:
        dot_content: Graph description to render
        output_path: Destination file for the renderer's stdout
        command: Renderer argv (defaults to "dot -Tsvg")

    Returns:
        Number of bytes written

    Raises:
        RenderError: If the renderer cannot be spawned, the pipe breaks, or
                     the output file cannot be written
    """
    argv = list(command) if command is not None else renderer_command()
    output_path = Path(output_path)

    try:
        process = subprocess.Popen(
            argv, stdin=subprocess.PIPE, stdout=subprocess.PIPE, bufsize=0
        )
    except OSError as e:
        raise RenderError(f"Failed to start renderer {argv[0]!r}: {e}") from e

    chunks: list[bytes] = []
    reader = threading.Thread(
        target=_read_stream,
        args=(process.stdout, chunks),
        name="depviz-render-reader",
        daemon=True,
    )
    reader.start()

    try:
        _write_stream(process.stdin, dot_content.encode("utf-8"))
    except OSError as e:
        process.stdin.close()
        process.kill()
        reader.join()
        process.wait()
        raise RenderError(f"Failed to pipe graph to renderer {argv[0]!r}: {e}") from e

    reader.join()
    process.wait()
    output = b"".join(chunks)

    if process.returncode != 0:
        logger.warning(f"Renderer {argv[0]!r} exited with status {process.returncode}")

    try:
        output_path.write_bytes(output)
    except OSError as e:
        raise RenderError(f"Failed to write {output_path}: {e}") from e

    logger.info(f"Wrote {len(output)} bytes to {output_path}")
    return len(output)
