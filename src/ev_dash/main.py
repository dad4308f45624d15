import argparse
import logging
import random
import signal
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication, QTimer

from ev_dash.config.settings import Settings, get_data_dir
from ev_dash.services.engine import DashboardEngine
from ev_dash.services.trip_store import JsonTripFlagStore
from ev_dash.ui.console import ConsolePresenter


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="ev-dash", description="Simulated EV telemetry dashboard")
    p.add_argument("--duration", type=float, default=0, help="Seconds to run (0 = until Ctrl+C)")
    choice = p.add_mutually_exclusive_group()
    choice.add_argument("--resume", action="store_true", help="Continue the saved trip")
    choice.add_argument("--new-trip", action="store_true", help="Discard the saved trip")
    p.add_argument("--seed", type=int, default=None, help="Seed the telemetry generator")
    p.add_argument("--data-dir", type=Path, default=None, help="Where the trip flag is stored")
    p.add_argument("--settings", type=Path, default=None, help="Settings JSON file")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def answer_prompt(engine: DashboardEngine, args: argparse.Namespace) -> None:
    """Resolve the resume prompt from flags, or ask when attached to a terminal."""
    if not engine.session.show_prompt:
        return
    if args.resume:
        engine.on_resume_trip()
    elif args.new_trip:
        engine.on_start_new_trip()
    elif sys.stdin.isatty():
        reply = input("Continue previous trip? [y/n] ").strip().lower()
        if reply.startswith("y"):
            engine.on_resume_trip()
        else:
            engine.on_start_new_trip()


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    settings = Settings.load(args.settings)
    data_dir = args.data_dir or get_data_dir()
    store = JsonTripFlagStore(data_dir / "session.json")
    rng = random.Random(args.seed) if args.seed is not None else None

    engine = DashboardEngine(settings, store, rng=rng)
    answer_prompt(engine, args)
    presenter = ConsolePresenter(engine, interval_ms=settings.render_interval_ms)

    # Let Python handle Ctrl+C while the Qt loop is running
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    heartbeat = QTimer()
    heartbeat.timeout.connect(lambda: None)
    heartbeat.start(200)

    if args.duration > 0:
        QTimer.singleShot(int(args.duration * 1000), app.quit)

    engine.start()
    presenter.start()
    try:
        return app.exec()
    finally:
        presenter.stop()
        heartbeat.stop()
        engine.stop()


if __name__ == "__main__":
    raise SystemExit(main())
