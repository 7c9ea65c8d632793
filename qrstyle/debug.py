"""Debug sinks: where intermediate render stages are written for inspection."""

from collections.abc import Callable
from pathlib import Path

from PIL import Image

from qrstyle.logging import audit, get_logger

log = get_logger("debug")

ImageFactory = Callable[[], Image.Image]


class DebugSink:
    """Receives intermediate images and notices from the pipeline stages.

    Stages call ``emit`` and ``note`` unconditionally; ``render`` is only
    invoked by sinks that actually keep the image, and always before ``emit``
    returns.
    """

    def emit(self, label: str, render: ImageFactory) -> None:
        raise NotImplementedError

    def note(self, event: str, **context) -> None:
        raise NotImplementedError


class NullDebugSink(DebugSink):
    """Discards everything."""

    def emit(self, label: str, render: ImageFactory) -> None:
        pass

    def note(self, event: str, **context) -> None:
        pass


class DirectoryDebugSink(DebugSink):
    """Writes each emitted image to ``<directory>/<label>.png`` and audits notices.

    Write failures are logged and swallowed: debug output is never part of
    the render result.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def emit(self, label: str, render: ImageFactory) -> None:
        path = self.directory / f"{label}.png"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            render().save(path)
        except OSError as e:
            log.warning("Could not write debug image %s: %s", path, e)
            return
        audit("debug.image_written", logger=log, path=str(path))

    def note(self, event: str, **context) -> None:
        audit(event, logger=log, **context)


def sink_for(config) -> DebugSink:
    """Pick the sink matching ``config.debug``."""
    if config.debug:
        return DirectoryDebugSink(config.debug_dir)
    return NullDebugSink()
