import io

from ev_dash.services.engine import DashboardEngine
from ev_dash.services.trip_store import MemoryTripFlagStore
from ev_dash.ui.console import ConsolePresenter, battery_bar, car_track, format_view


def test_battery_bar_fill():
    assert battery_bar(50, width=10) == "[#####.....]"
    assert battery_bar(0, width=4) == "[....]"
    assert battery_bar(100, width=4) == "[####]"


def test_car_track_stays_inside_strip():
    assert car_track(0, width=10) == "|C_________|"
    assert car_track(90, width=10) == "|_________C|"


def test_format_view_lists_gauges(fixed_clock):
    engine = DashboardEngine(clock=fixed_clock)
    text = "\n".join(format_view(engine.snapshot()))

    assert "13:22  Cycles: 112/1000" in text
    assert "Trip Distance: 0.0 km" in text
    assert "AI Predicted Health: 99.61%" in text
    assert "Water Level: 6.00 L" in text
    assert "Continue previous trip?" not in text


def test_format_view_shows_prompt(fixed_clock):
    store = MemoryTripFlagStore({"tripInProgress": "true"})
    engine = DashboardEngine(store=store, clock=fixed_clock)
    lines = format_view(engine.snapshot())

    assert lines[0].startswith("Continue previous trip?")


def test_presenter_renders_frames(fixed_clock):
    engine = DashboardEngine(clock=fixed_clock)
    out = io.StringIO()
    presenter = ConsolePresenter(engine, stream=out)

    presenter.render()
    presenter.render()
    presenter.stop()

    assert out.getvalue().count("System Online") == 2
