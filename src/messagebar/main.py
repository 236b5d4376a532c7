#!/usr/bin/env python3
"""Message bar demo.

Runs an asyncio event loop that:
  1. Posts a scripted sequence of success and error messages
  2. Lets the visibility controller show and auto-hide the bar
  3. Renders frames at a fixed rate and writes them as PNG files
"""

import argparse
import asyncio
import dataclasses
import logging
import signal
from pathlib import Path

from messagebar.config import ConfigError, MessageBarConfig, load_config
from messagebar.core.logging_config import setup_logging
from messagebar.core.scheduler import AsyncioScheduler
from messagebar.ui.content import ContentWithMessageBar

log = logging.getLogger("messagebar.main")

FRAME_SIZE = (480, 160)

# (delay before posting in ms, kind, text)
SCRIPT = [
    (0, "success", "Successfully Updated."),
    (500, "success", "Successfully Updated."),
    (3500, "error", "Internet Unavailable."),
    (100, "success", "Successful."),
]


class MessageBarDemo:
    """Drives one ContentWithMessageBar from a script and records frames."""

    def __init__(self, config: MessageBarConfig, out_dir: Path, fps: int = 10):
        self.config = config
        self.out_dir = out_dir
        self._fps = fps
        self._running = False
        self._frame_no = 0
        self.surface: ContentWithMessageBar | None = None
        self._script: asyncio.Task | None = None

    def _on_visibility(self, data: dict) -> None:
        log.info("Bar %s (v%s)", "shown" if data["visible"] else "hidden", data["version"])

    async def _play_script(self) -> None:
        for delay_ms, kind, text in SCRIPT:
            await asyncio.sleep(delay_ms / 1000.0)
            if kind == "error":
                self.surface.add_error(ConnectionError(text))
            else:
                self.surface.add_success(text)
            log.info("→ %s: %s", kind, text)
        await asyncio.sleep(self.config.visibility_duration_ms / 1000.0 + 0.2)
        self._running = False

    async def run(self) -> None:
        """Main event loop."""
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self._running = True
        frame_interval = 1.0 / self._fps

        with ContentWithMessageBar(FRAME_SIZE, self.config,
                                   scheduler=AsyncioScheduler()) as surface:
            self.surface = surface
            surface.controller.subscribe(self._on_visibility)
            self._script = asyncio.create_task(self._play_script())
            try:
                while self._running:
                    try:
                        frame = surface.render()
                        frame.save(self.out_dir / f"frame_{self._frame_no:05d}.png")
                        self._frame_no += 1
                    except OSError:
                        log.exception("Frame write error")
                    await asyncio.sleep(frame_interval)
            except asyncio.CancelledError:
                log.info("Render loop cancelled")
            finally:
                self._script.cancel()
                await asyncio.gather(self._script, return_exceptions=True)
        log.info("Wrote %d frames to %s", self._frame_no, self.out_dir)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Render a scripted message bar demo")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--out", default="frames", help="output directory for PNG frames")
    parser.add_argument("--duration-ms", type=int, help="override visibility duration")
    parser.add_argument("--fps", type=int, default=10)
    args = parser.parse_args(argv)

    setup_logging()
    log.info("=== Message Bar Demo ===")

    config = load_config(args.config)
    if args.duration_ms is not None:
        try:
            config = dataclasses.replace(config, visibility_duration_ms=args.duration_ms)
        except ConfigError as e:
            parser.error(f"--duration-ms: {e}")
    demo = MessageBarDemo(config, Path(args.out), fps=args.fps)

    loop = asyncio.new_event_loop()

    def signal_handler():
        log.info("Signal received, stopping...")
        demo._running = False

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        loop.run_until_complete(demo.run())
    finally:
        loop.close()


if __name__ == "__main__":
    main()
